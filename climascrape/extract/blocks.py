"""Locate per-day forecast cards and flatten them into token sequences."""

import re

from bs4 import BeautifulSoup, Tag
from bs4.element import NavigableString, PreformattedString

DEGREE = "°"
SECTION_MARKERS = ("Previsão do Tempo", "15 Dias")
CARD_TAGS = ["div", "section", "article"]

_WS_RE = re.compile(r"\s+")


def parse_document(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def normalize_token(text: str) -> str:
    """Collapse runs of whitespace to one space and trim."""
    return _WS_RE.sub(" ", text).strip()


def _text_nodes(element: Tag) -> list[NavigableString]:
    # Comments, doctypes and CDATA are PreformattedString subclasses
    return [
        s for s in element.find_all(string=True)
        if not isinstance(s, PreformattedString)
    ]


def find_scope(soup: BeautifulSoup, markers: tuple[str, ...] = SECTION_MARKERS) -> Tag:
    """Return the first section with a text node carrying every marker.

    Falls back to the whole document.
    """
    for section in soup.find_all("section"):
        for text in _text_nodes(section):
            if all(m in text for m in markers):
                return section
    return soup


def block_tokens(element: Tag) -> list[str]:
    tokens = []
    for text in _text_nodes(element):
        token = normalize_token(str(text))
        if token:
            tokens.append(token)
    return tokens


def locate_blocks(soup: BeautifulSoup) -> list[list[str]]:
    """Token sequences for every card-like element holding a degree sign.

    Nested candidates are kept; duplicates are resolved later by date key.
    """
    scope = find_scope(soup)
    blocks = []
    for element in scope.find_all(CARD_TAGS):
        if any(DEGREE in text for text in _text_nodes(element)):
            blocks.append(block_tokens(element))
    return blocks
