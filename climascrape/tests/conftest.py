"""Shared test fixtures."""

from datetime import date
from pathlib import Path

import pytest
import yaml

from climascrape.config.schema import AppConfig, HttpConfig


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def page_html(fixtures_dir: Path) -> str:
    """A saved 15-day page with four forecast cards (Oct 30 .. Nov 2)."""
    return (fixtures_dir / "climatempo_15d.html").read_text(encoding="utf-8")


@pytest.fixture
def today() -> date:
    """Reference day matching the fixture page."""
    return date(2026, 10, 30)


@pytest.fixture
def fast_http() -> HttpConfig:
    """HTTP config with tiny backoff so retry tests stay fast."""
    return HttpConfig(max_retries=3, backoff_seconds=0.01)


@pytest.fixture
def default_config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "source": {"city": "Criciúma", "state": "SC"},
        "http": {"max_retries": 5, "backoff_seconds": 0.5},
        "cache": {"ttl_minutes": 10},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, allow_unicode=True)
    return path
