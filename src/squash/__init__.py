"""Squash Browser: fetch, decode and parse a page into observable state."""

__version__ = "0.1.0"

APP_TITLE = "Squash Browser"
