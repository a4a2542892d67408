"""
Unit Tests for the Normalizer
"""

import pytest

from notion_tree.pipeline.normalizer import (
    UNTITLED_DATABASE,
    UNTITLED_PAGE,
    get_database_title,
    get_page_title,
    is_workspace_root,
    item_from_block,
    item_from_database,
    item_from_page,
)
from notion_tree.schemas.tree import NodeKind

from fake_notion import child_database_block, child_page_block, database, page, paragraph_block


class TestPageTitle:
    """Tests for get_page_title."""

    def test_title_property(self):
        """Test the title-typed property is used."""
        assert get_page_title(page("p", "Roadmap")) == "Roadmap"

    def test_rich_text_runs_joined(self):
        """Test multiple runs are concatenated in order."""
        raw = {
            "properties": {
                "Status": {"type": "select", "select": {"name": "Done"}},
                "Task": {
                    "type": "title",
                    "title": [{"plain_text": "Ship "}, {"plain_text": "v2"}],
                },
            },
        }

        assert get_page_title(raw) == "Ship v2"

    def test_child_page_fallback(self):
        """Test the embedded child_page title is used without a title property."""
        raw = {"properties": {"Name": {"type": "title", "title": []}}, "child_page": {"title": "Embedded"}}

        assert get_page_title(raw) == "Embedded"

    @pytest.mark.parametrize("raw", [
        {},
        {"properties": {}},
        {"properties": {"Name": {"type": "title", "title": []}}},
        {"properties": {"Name": {"type": "title", "title": [{"plain_text": ""}]}}},
        {"child_page": {"title": ""}},
    ])
    def test_untitled(self, raw):
        """Test the sentinel when nothing usable is present."""
        assert get_page_title(raw) == UNTITLED_PAGE


class TestDatabaseTitle:
    """Tests for get_database_title."""

    def test_title_runs(self):
        """Test database title runs are joined."""
        assert get_database_title(database("d", "Tasks")) == "Tasks"

    @pytest.mark.parametrize("raw", [{}, {"title": []}, {"title": None}])
    def test_untitled(self, raw):
        """Test the database sentinel."""
        assert get_database_title(raw) == UNTITLED_DATABASE


class TestItems:
    """Tests for RemoteItem construction."""

    def test_workspace_root(self):
        """Test parent type detection."""
        assert is_workspace_root(page("p", "P"))
        assert not is_workspace_root(page("p", "P", parent={"type": "page_id", "page_id": "x"}))
        assert not is_workspace_root({})

    def test_url_only_when_requested(self):
        """Test URLs are dropped unless inclusion is enabled."""
        raw = page("p", "P", url="https://notion.so/p")

        assert item_from_page(raw).url is None
        assert item_from_page(raw, include_url=True).url == "https://notion.so/p"

    def test_database_item(self):
        """Test database normalization."""
        item = item_from_database(database("d", "Tasks"))

        assert item.kind is NodeKind.DATABASE
        assert item.title == "Tasks"

    def test_child_blocks(self):
        """Test child_page and child_database blocks become items."""
        sub = item_from_block(child_page_block("b1", "Sub"), "parent")
        inline = item_from_block(child_database_block("b2", ""), "parent")

        assert (sub.kind, sub.title) == (NodeKind.PAGE, "Sub")
        assert sub.parent == {"type": "page_id", "page_id": "parent"}
        assert (inline.kind, inline.title) == (NodeKind.DATABASE, UNTITLED_DATABASE)

    def test_other_blocks_ignored(self):
        """Test non-child blocks are not part of the tree."""
        assert item_from_block(paragraph_block("b3"), "parent") is None

    def test_to_node(self):
        """Test conversion to a tree node."""
        node = item_from_database(database("d", "Tasks")).to_node()

        assert node.kind is NodeKind.DATABASE
        assert node.children == []
        assert node.url is None
