"""
Unit Tests for Configuration
"""

from notion_tree.config import Settings


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test defaults without any environment."""
        for name in ("NOTION_API_KEY", "TREE_MAX_DEPTH", "TREE_INCLUDE_URLS", "TREE_OUTPUT_FORMAT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.notion.api_key is None
        assert settings.notion.base_url == "https://api.notion.com/v1"
        assert settings.tree.max_depth is None
        assert settings.tree.include_urls is False
        assert settings.tree.page_size == 100
        assert settings.output.format == "console"

    def test_environment(self, monkeypatch):
        """Test values are read from environment variables."""
        monkeypatch.setenv("NOTION_API_KEY", "secret_abc")
        monkeypatch.setenv("TREE_MAX_DEPTH", "2")
        monkeypatch.setenv("TREE_INCLUDE_URLS", "true")
        monkeypatch.setenv("TREE_OUTPUT_FORMAT", "all")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings()

        assert settings.notion.api_key == "secret_abc"
        assert settings.tree.max_depth == 2
        assert settings.tree.include_urls is True
        assert settings.output.format == "all"
        assert settings.log.level == "DEBUG"
