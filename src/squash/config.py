"""Configuration using pydantic-settings."""

from pydantic_settings import BaseSettings

from .core.fetcher import DEFAULT_TIMEOUT
from .parser import MAX_LINKS

DEFAULT_ADDRESS = "https://www.example.com"
DEFAULT_SIDEBAR_WIDTH = 500


class BrowserSettings(BaseSettings):
    """Browser configuration."""

    default_address: str = DEFAULT_ADDRESS
    timeout: float = DEFAULT_TIMEOUT
    max_links: int = MAX_LINKS
    show_loading_status: bool = True
    report_status_code: bool = False
    sidebar_width: int = DEFAULT_SIDEBAR_WIDTH
    user_agent: str | None = None

    model_config = {"env_prefix": "SQUASH_"}


settings = BrowserSettings()
