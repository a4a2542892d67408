"""
Pipeline - Discovery Module

Search-based discovery of the workspace-level pages and databases.
"""

import logging
from typing import List, Optional

from notion_tree.pipeline.client import BaseGraphClient, DEFAULT_PAGE_SIZE
from notion_tree.pipeline.context import TraversalContext
from notion_tree.pipeline.normalizer import (
    RemoteItem,
    is_workspace_root,
    item_from_database,
    item_from_page,
)


logger = logging.getLogger(__name__)


class RootDiscovery:
    """Discovers the depth-0 frontier shared with the integration."""

    def __init__(self, client: BaseGraphClient, page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    async def discover_roots(self, ctx: Optional[TraversalContext] = None) -> List[RemoteItem]:
        """
        Find all workspace-level pages, then all workspace-level databases.

        Only the first result page of each search is read; workspaces with
        more root items of one kind than page_size are truncated.

        Args:
            ctx: Traversal context (options and progress)

        Returns:
            Root items, pages first, each group in search order

        Raises:
            NotionAPIError: either search failed (fatal for the run)
        """
        ctx = ctx or TraversalContext()
        roots: List[RemoteItem] = []
        pages_seen = 0
        databases_seen = 0

        ctx.emit("status", "Searching for pages...")
        response = await self.client.search("page", page_size=self.page_size)
        self._note_truncation(response, "page")
        for result in response.get("results", []):
            if is_workspace_root(result):
                roots.append(item_from_page(result, ctx.include_urls))
            pages_seen += 1
            ctx.emit("discovery_progress", pages_seen, databases_seen)

        ctx.emit("status", "Searching for databases...")
        response = await self.client.search("database", page_size=self.page_size)
        self._note_truncation(response, "database")
        for result in response.get("results", []):
            if is_workspace_root(result):
                roots.append(item_from_database(result, ctx.include_urls))
            databases_seen += 1
            ctx.emit("discovery_progress", pages_seen, databases_seen)

        logger.info(
            "Discovered %d root items (%d pages and %d databases searched)",
            len(roots), pages_seen, databases_seen,
        )
        return roots

    def _note_truncation(self, response: dict, object_kind: str) -> None:
        if response.get("has_more"):
            logger.debug(
                "Search for %s objects has more than %d results; only the first page is used",
                object_kind, self.page_size,
            )
