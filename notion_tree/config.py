"""
Notion Tree - Configuration

Pydantic Settings for all configuration via environment variables.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional, Literal


class NotionSettings(BaseSettings):
    """Notion API configuration."""
    api_key: Optional[str] = Field(None, alias="NOTION_API_KEY")
    base_url: str = Field("https://api.notion.com/v1", alias="NOTION_BASE_URL")
    api_version: str = Field("2022-06-28", alias="NOTION_VERSION")
    timeout_seconds: float = Field(30.0, alias="NOTION_TIMEOUT_SECONDS")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class TreeSettings(BaseSettings):
    """Traversal configuration."""
    max_depth: Optional[int] = Field(None, ge=0, alias="TREE_MAX_DEPTH")
    include_urls: bool = Field(False, alias="TREE_INCLUDE_URLS")
    page_size: int = Field(100, ge=1, le=100, alias="TREE_PAGE_SIZE")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class OutputSettings(BaseSettings):
    """Output format configuration."""
    format: Literal["console", "markdown", "json", "all"] = Field(
        "console", alias="TREE_OUTPUT_FORMAT"
    )
    output: Optional[str] = Field(None, alias="TREE_OUTPUT")
    ascii: bool = Field(False, alias="TREE_ASCII")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class LogSettings(BaseSettings):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING", alias="LOG_LEVEL"
    )

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""
    notion: NotionSettings = Field(default_factory=NotionSettings)
    tree: TreeSettings = Field(default_factory=TreeSettings)
    output: OutputSettings = Field(default_factory=OutputSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = {"env_prefix": "", "extra": "ignore"}


def get_settings() -> Settings:
    """Load settings from environment variables."""
    from dotenv import load_dotenv
    load_dotenv()
    return Settings()
