"""
Pipeline Module - Tree Construction

Handles the flow from the Notion API to an in-memory tree:
Discovery → Fetch children → Normalize → Expand
"""

from notion_tree.pipeline.client import (
    BaseGraphClient,
    NotionClient,
    NotionAPIError,
    NotionUnauthorizedError,
)
from notion_tree.pipeline.context import TraversalContext, BranchFailure
from notion_tree.pipeline.discovery import RootDiscovery
from notion_tree.pipeline.fetcher import ChildFetcher
from notion_tree.pipeline.progress import (
    ProgressReporter,
    NullProgressReporter,
    SpinnerProgressReporter,
)
from notion_tree.pipeline.traversal import TreeBuilder, build_tree

__all__ = [
    "BaseGraphClient",
    "NotionClient",
    "NotionAPIError",
    "NotionUnauthorizedError",
    "TraversalContext",
    "BranchFailure",
    "RootDiscovery",
    "ChildFetcher",
    "ProgressReporter",
    "NullProgressReporter",
    "SpinnerProgressReporter",
    "TreeBuilder",
    "build_tree",
]
