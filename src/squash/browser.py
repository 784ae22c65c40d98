"""Fetch-decode-parse pipeline bound to observable page state."""

import asyncio
import logging
from urllib.parse import urlsplit, urlunsplit

import httpx

from . import APP_TITLE
from .commands import AsyncCommand, ToggleCommand
from .config import BrowserSettings, settings as default_settings
from .core import Fetcher, HttpFetcher, Response
from .parser import ParseError, parse_page
from .state import ErrorKind, PageState

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")
FORBIDDEN_HOST_CHARS = set(" \t\r\n<>\"{}|\\^`")

HTTP_ERROR_MESSAGES = {
    400: "HTTP 400 Bad Request: the server could not understand the request.",
    403: "HTTP 403 Forbidden: access to this page is denied.",
    404: "HTTP 404 Not Found: the page does not exist on this server.",
}


def parse_absolute_url(address: str) -> str | None:
    """
    Parse an absolute http(s) URL and return its normalized form.

    Scheme and host are lowercased, userinfo keeps its case, and an empty path becomes "/".
    Returns None when the address is not an absolute URL.
    """
    try:
        parts = urlsplit(address.strip())
        if parts.scheme.lower() not in ALLOWED_SCHEMES:
            return None
        host = parts.hostname
        if not host or FORBIDDEN_HOST_CHARS & set(parts.netloc) or parts.netloc.endswith(":"):
            return None
        # Raises ValueError for a non-numeric or out of range port
        parts.port
    except ValueError:
        return None

    userinfo, at, host_port = parts.netloc.rpartition("@")
    return urlunsplit((
        parts.scheme.lower(),
        userinfo + at + host_port.lower(),
        parts.path or "/",
        parts.query,
        parts.fragment,
    ))


def describe_response(response: Response, report_status_code: bool = False) -> str:
    """Status line for a completed request."""
    status_line = f"HTTP {response.status} {response.reason}".rstrip()

    if response.is_success:
        message = f"Loaded {len(response.content):,} bytes"
        if report_status_code:
            message += f" ({status_line})"
        return message

    return HTTP_ERROR_MESSAGES.get(response.status, status_line)


class BrowserViewModel:
    """Owns the page state and the commands a UI binds to."""

    title = APP_TITLE

    def __init__(
        self,
        settings: BrowserSettings | None = None,
        fetcher: Fetcher | None = None,
    ):
        self.settings = settings or default_settings
        self.fetcher = fetcher or HttpFetcher(
            timeout=self.settings.timeout,
            user_agent=self.settings.user_agent,
        )
        self.state = PageState(
            address=self.settings.default_address,
            sidebar_width=self.settings.sidebar_width,
        )

        self.fetch_command = AsyncCommand(self.fetch, lambda: not self.state.is_busy)
        self.toggle_html_command = ToggleCommand(self.state, "show_html")
        self.toggle_sidebar_command = ToggleCommand(self.state, "sidebar_visible")

        self.state.subscribe(self._on_state_changed)

    def _on_state_changed(self, name: str, value):
        if name == "is_busy":
            self.fetch_command.raise_can_execute_changed()

    async def fetch(self):
        """Fetch the current address and update the page state."""
        state = self.state

        if not state.address or not state.address.strip():
            state.status = "Please enter a URL."
            return

        url = parse_absolute_url(state.address)
        if url is None:
            # Only schemeless input gets the https:// retry
            if "://" not in state.address:
                url = parse_absolute_url("https://" + state.address.strip())
            if url is None:
                state.status = "Invalid URL."
                return
            state.address = url

        state.is_busy = True
        state.html_source = ""
        state.clear_parsed()
        state.error_kind = ErrorKind.NONE
        if self.settings.show_loading_status:
            state.status = "Loading..."

        try:
            response = await asyncio.wait_for(
                self.fetcher.fetch(url),
                timeout=self.settings.timeout,
            )

            state.html_source = response.text
            state.status = describe_response(response, self.settings.report_status_code)
            logger.info("%s: %s", url, state.status)

            self._parse(state.html_source)

        except (httpx.TimeoutException, asyncio.TimeoutError):
            logger.warning("Request to %s timed out", url)
            self._fail(ErrorKind.TIMEOUT, "Request timed out.")

        except httpx.RequestError as e:
            logger.warning("Network error fetching %s: %s", url, e)
            self._fail(ErrorKind.NETWORK, f"Network error: {e}")

        except Exception as e:
            logger.exception("Unexpected error fetching %s", url)
            self._fail(ErrorKind.UNEXPECTED, f"Unexpected error: {e}")

        finally:
            state.is_busy = False

    def _parse(self, html: str):
        """Update title and links; parse failures clear them without touching status."""
        try:
            page = parse_page(html, max_links=self.settings.max_links)
        except ParseError as e:
            logger.warning("Could not parse page: %s", e)
            self.state.clear_parsed()
            self.state.error_kind = ErrorKind.PARSE
            return

        self.state.set_parsed(page.title, page.links)

    def _fail(self, kind: ErrorKind, status: str):
        self.state.status = status
        self.state.clear_parsed()
        self.state.error_kind = kind

    async def close(self):
        await self.fetcher.close()
