"""CLI entry point for the 15-day forecast scraper."""

import argparse
import json
import logging

from climascrape.config.loader import get_config_value, load_config
from climascrape.ingest.page_fetcher import FetchError, PageFetcher
from climascrape.pipeline.forecast_pipeline import extract_forecast


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="climascrape",
        description="Climatempo 15-day forecast scraper",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")

    sub = parser.add_subparsers(dest="command")

    # scrape
    scrape_p = sub.add_parser("scrape", help="Fetch and extract the 15-day forecast")
    scrape_p.add_argument("--url", help="Forecast page URL")
    scrape_p.add_argument("--city", help="City label for the result")
    scrape_p.add_argument("--state", help="State label for the result")
    scrape_p.add_argument("--max-days", type=int, help="Limit the number of days")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print a config value")
    get_p.add_argument("key", help="Dotted key, e.g. http.max_retries")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = load_config(args.config)

    if args.command == "scrape":
        return _cmd_scrape(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_scrape(config, args) -> int:
    url = args.url or config.source.url
    city = args.city or config.source.city
    state = args.state or config.source.state
    max_days = args.max_days or config.extraction.max_days

    try:
        result = extract_forecast(
            url, city, state,
            fetcher=PageFetcher(config.http),
            max_days=max_days,
        )
    except FetchError as e:
        print(f"Error: {e}")
        return 1

    print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    return 0


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(config, args.key)
        except KeyError as e:
            print(f"Error: {e}")
            return 1
        print(value)
        return 0
    else:
        print("Use: config show | config get key")
        return 1
