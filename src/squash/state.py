"""Observable page state for UI binding."""

import logging
from enum import Enum
from typing import Any, Callable

from .config import DEFAULT_ADDRESS, DEFAULT_SIDEBAR_WIDTH
from .parser import ParsedLink

logger = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]


class ErrorKind(str, Enum):
    """Kind of failure recorded by the last fetch."""

    NONE = "none"
    TIMEOUT = "timeout"
    NETWORK = "network"
    UNEXPECTED = "unexpected"
    PARSE = "parse"

    @property
    def is_fetch_failure(self) -> bool:
        return self in (ErrorKind.TIMEOUT, ErrorKind.NETWORK, ErrorKind.UNEXPECTED)


class Observable:
    """Publishes (name, value) to subscribers whenever a field changes."""

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, name: str, value: Any):
        for listener in list(self._listeners):
            listener(name, value)

    def _set(self, name: str, value: Any) -> bool:
        """Store a field and notify if it changed. Returns True on change."""
        attr = f"_{name}"
        if getattr(self, attr) == value:
            return False
        setattr(self, attr, value)
        self.notify(name, value)
        return True


class PageState(Observable):
    """Address, fetched HTML and parse results of the current page."""

    def __init__(
        self,
        address: str = DEFAULT_ADDRESS,
        sidebar_width: int = DEFAULT_SIDEBAR_WIDTH,
    ):
        super().__init__()
        self._address = address
        self._html_source = ""
        self._status = "Idle"
        self._is_busy = False
        self._page_title = ""
        self._links: tuple[ParsedLink, ...] = ()
        self._show_html = False
        self._sidebar_visible = True
        self._error_kind = ErrorKind.NONE
        self._full_sidebar_width = sidebar_width

    @property
    def address(self) -> str:
        return self._address

    @address.setter
    def address(self, value: str):
        self._set("address", value)

    @property
    def html_source(self) -> str:
        return self._html_source

    @html_source.setter
    def html_source(self, value: str):
        self._set("html_source", value)

    @property
    def status(self) -> str:
        return self._status

    @status.setter
    def status(self, value: str):
        if self._set("status", value):
            logger.debug("status: %s", value)

    @property
    def is_busy(self) -> bool:
        return self._is_busy

    @is_busy.setter
    def is_busy(self, value: bool):
        self._set("is_busy", value)

    @property
    def page_title(self) -> str:
        return self._page_title

    @property
    def links(self) -> tuple[ParsedLink, ...]:
        return self._links

    @property
    def link_count(self) -> int:
        return len(self._links)

    @property
    def show_html(self) -> bool:
        return self._show_html

    @show_html.setter
    def show_html(self, value: bool):
        self._set("show_html", value)

    @property
    def sidebar_visible(self) -> bool:
        return self._sidebar_visible

    @sidebar_visible.setter
    def sidebar_visible(self, value: bool):
        if self._set("sidebar_visible", value):
            self.notify("sidebar_width", self.sidebar_width)

    @property
    def sidebar_width(self) -> int:
        """Pixel width of the sidebar column; zero while hidden."""
        return self._full_sidebar_width if self._sidebar_visible else 0

    @property
    def error_kind(self) -> ErrorKind:
        return self._error_kind

    @error_kind.setter
    def error_kind(self, value: ErrorKind):
        self._set("error_kind", value)

    def set_parsed(self, title: str, links):
        """Replace title and links together."""
        links = tuple(links)
        self._set("page_title", title)
        if self._set("links", links):
            self.notify("link_count", len(links))

    def clear_parsed(self):
        self.set_parsed("", ())
