"""
Pipeline - Normalizer

Resolves heterogeneous Notion objects (pages, databases, child blocks)
into a uniform RemoteItem once, at ingestion.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from notion_tree.schemas.tree import NodeKind, TreeNode


UNTITLED_PAGE = "Untitled"
UNTITLED_DATABASE = "Untitled Database"

CHILD_PAGE = "child_page"
CHILD_DATABASE = "child_database"


@dataclass(frozen=True)
class RemoteItem:
    """A discovered item awaiting expansion."""
    id: str
    title: str
    kind: NodeKind
    parent: Optional[Dict[str, Any]] = None
    url: Optional[str] = None

    def to_node(self) -> TreeNode:
        return TreeNode(
            id=self.id,
            title=self.title,
            kind=self.kind,
            url=self.url,
        )


def _plain_text(runs: Optional[List[Dict[str, Any]]]) -> str:
    if not runs:
        return ""
    return "".join(run.get("plain_text") or "" for run in runs)


def get_page_title(page: Dict[str, Any]) -> str:
    """
    Extract the display title of a page.

    Uses the property typed "title", then the embedded child_page title,
    then "Untitled".
    """
    for prop in (page.get("properties") or {}).values():
        if prop.get("type") == "title" and prop.get("title"):
            title = _plain_text(prop["title"])
            if title:
                return title

    child_page = page.get("child_page") or {}
    if child_page.get("title"):
        return child_page["title"]

    return UNTITLED_PAGE


def get_database_title(database: Dict[str, Any]) -> str:
    """Extract the display title of a database."""
    return _plain_text(database.get("title")) or UNTITLED_DATABASE


def is_workspace_root(raw: Dict[str, Any]) -> bool:
    """True when the item sits directly under the workspace."""
    return (raw.get("parent") or {}).get("type") == "workspace"


def item_from_page(page: Dict[str, Any], include_url: bool = False) -> RemoteItem:
    return RemoteItem(
        id=page["id"],
        title=get_page_title(page),
        kind=NodeKind.PAGE,
        parent=page.get("parent"),
        url=page.get("url") if include_url else None,
    )


def item_from_database(database: Dict[str, Any], include_url: bool = False) -> RemoteItem:
    return RemoteItem(
        id=database["id"],
        title=get_database_title(database),
        kind=NodeKind.DATABASE,
        parent=database.get("parent"),
        url=database.get("url") if include_url else None,
    )


def item_from_block(block: Dict[str, Any], parent_id: str) -> Optional[RemoteItem]:
    """
    Normalize a child block of a page.

    Only child_page and child_database blocks are part of the tree;
    every other block type yields None.
    """
    block_type = block.get("type")
    parent = {"type": "page_id", "page_id": parent_id}

    if block_type == CHILD_PAGE:
        title = (block.get(CHILD_PAGE) or {}).get("title") or UNTITLED_PAGE
        return RemoteItem(id=block["id"], title=title, kind=NodeKind.PAGE, parent=parent)
    if block_type == CHILD_DATABASE:
        title = (block.get(CHILD_DATABASE) or {}).get("title") or UNTITLED_DATABASE
        return RemoteItem(id=block["id"], title=title, kind=NodeKind.DATABASE, parent=parent)
    return None
