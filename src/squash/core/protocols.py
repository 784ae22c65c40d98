"""Protocol definitions for browser components."""

from dataclasses import dataclass
from typing import Protocol

from ..encoding import charset_from_content_type, decode_body


@dataclass
class Response:
    """HTTP response container."""

    url: str
    status: int
    content: bytes
    headers: dict[str, str]
    reason: str = ""

    @property
    def content_type(self) -> str:
        for name, value in self.headers.items():
            if name.lower() == "content-type":
                return value
        return ""

    @property
    def charset(self) -> str | None:
        """Charset declared in the Content-Type header, if any."""
        return charset_from_content_type(self.content_type)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        """Decode content with the declared charset, falling back to UTF-8."""
        return decode_body(self.content, self.charset)


class Fetcher(Protocol):
    """Protocol for URL fetchers."""

    async def fetch(self, url: str) -> Response:
        """Fetch a URL and return the response."""
        ...

    async def close(self) -> None:
        ...
