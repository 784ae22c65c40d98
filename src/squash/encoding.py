"""Charset detection with UTF-8 fallback."""

import codecs
import logging

logger = logging.getLogger(__name__)

FALLBACK_ENCODING = "utf-8"


def charset_from_content_type(content_type: str | None) -> str | None:
    """Extract the charset parameter from a Content-Type header value."""
    if not content_type:
        return None

    for param in content_type.split(";")[1:]:
        name, _, value = param.partition("=")
        if name.strip().lower() == "charset":
            value = value.strip().strip("\"'").strip()
            return value or None
    return None


def resolve_encoding(charset: str | None) -> str:
    """Map a declared charset to a codec name, falling back to UTF-8."""
    if not charset or not charset.strip():
        return FALLBACK_ENCODING

    try:
        name = codecs.lookup(charset.strip()).name
        # Raises LookupError for bytes-to-bytes codecs such as base64 or zlib
        b"".decode(name)
        return name
    except LookupError:
        logger.debug("Unknown charset %r, using %s", charset, FALLBACK_ENCODING)
        return FALLBACK_ENCODING


def decode_body(content: bytes, charset: str | None = None) -> str:
    """Decode response bytes, replacing undecodable sequences."""
    return content.decode(resolve_encoding(charset), errors="replace")
