from typing import Optional, Protocol

from bs4 import BeautifulSoup


class HtmlDocument(Protocol):
    """Read-only view over a parsed page. Selectors are CSS."""

    def text(self, selector: str) -> str:
        """Concatenated text of every matching element ("" when none match)."""
        ...

    def attribute(self, selector: str, name: str) -> Optional[str]:
        """Attribute `name` of the first matching element, or None."""
        ...

    def count(self, selector: str) -> int:
        ...


class SoupDocument:
    """HtmlDocument backed by BeautifulSoup's lenient html.parser."""

    def __init__(self, html: str):
        self.soup = BeautifulSoup(html or "", "html.parser")

    def text(self, selector: str) -> str:
        return "".join(el.get_text() for el in self.soup.select(selector))

    def attribute(self, selector: str, name: str) -> Optional[str]:
        element = self.soup.select_one(selector)
        if element is None:
            return None
        value = element.get(name)
        # multi-valued attributes (class, rel, ...) come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return value

    def count(self, selector: str) -> int:
        return len(self.soup.select(selector))


def parse_html(html: str) -> HtmlDocument:
    return SoupDocument(html)
