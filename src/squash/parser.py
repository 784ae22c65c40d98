"""Title and link extraction using selectolax."""

from dataclasses import dataclass

from selectolax.parser import HTMLParser, Node

MAX_LINKS = 200


class ParseError(Exception):
    """Raised when a document cannot be parsed."""


@dataclass(frozen=True)
class ParsedLink:
    """An outbound link; text falls back to the href when the anchor is empty."""

    href: str
    text: str


@dataclass(frozen=True)
class ParsedPage:
    title: str = ""
    links: tuple[ParsedLink, ...] = ()


class PageParser:
    """Query a parsed document for its title and anchors."""

    def __init__(self, html: str):
        self.tree = HTMLParser(html)

    def title(self) -> str:
        """Text of the first <title> element, or an empty string."""
        node = self.tree.css_first("title")
        if node is None:
            return ""
        return _node_text(node)

    def links(self, limit: int = MAX_LINKS) -> list[ParsedLink]:
        """Anchors with a non-empty href, in document order, up to *limit*."""
        links = []
        if limit <= 0:
            return links

        for node in self.tree.css("a[href]"):
            href = (node.attributes.get("href") or "").strip()
            if not href:
                continue

            text = _node_text(node)
            links.append(ParsedLink(href=href, text=text or href))
            if len(links) >= limit:
                break

        return links


def _node_text(node: Node) -> str:
    return (node.text(deep=True) or "").strip()


def parse_page(html: str, max_links: int = MAX_LINKS) -> ParsedPage:
    """
    Extract the page title and outbound links from HTML text.

    Raises:
        ParseError: If the parser fails on the document.
    """
    if not html or not html.strip():
        return ParsedPage()

    try:
        parser = PageParser(html)
        return ParsedPage(title=parser.title(), links=tuple(parser.links(max_links)))
    except Exception as e:
        raise ParseError(str(e) or e.__class__.__name__) from e
