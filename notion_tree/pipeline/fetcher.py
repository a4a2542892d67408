"""
Pipeline - Child Fetcher

Lists the direct children of a page or database. A failed listing
truncates that one subtree to a leaf; it never propagates.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from notion_tree.pipeline.client import BaseGraphClient, NotionAPIError, DEFAULT_PAGE_SIZE
from notion_tree.pipeline.context import TraversalContext
from notion_tree.pipeline.normalizer import (
    RemoteItem,
    item_from_block,
    item_from_page,
)
from notion_tree.schemas.tree import NodeKind


logger = logging.getLogger(__name__)


class ChildFetcher:
    """Fetches database rows and page child blocks."""

    def __init__(self, client: BaseGraphClient, page_size: int = DEFAULT_PAGE_SIZE):
        self.client = client
        self.page_size = page_size

    async def fetch_children(self, item: RemoteItem, ctx: TraversalContext) -> List[RemoteItem]:
        """Children of item in listing order; empty on failure."""
        if item.kind is NodeKind.DATABASE:
            return await self.fetch_database_rows(item.id, ctx)
        return await self.fetch_page_children(item.id, ctx)

    async def fetch_database_rows(self, database_id: str, ctx: TraversalContext) -> List[RemoteItem]:
        """
        Fetch the rows of a database as page items.

        A single query page is read.
        """
        ctx.emit("status", f"Fetching pages from database {database_id[:8]}...")
        try:
            response = await self.client.query_database(database_id, page_size=self.page_size)
        except NotionAPIError as e:
            logger.warning("Error fetching pages from database %s: %s", database_id, e)
            ctx.record_failure(database_id, NodeKind.DATABASE.value, e)
            return []

        if response.get("has_more"):
            logger.debug(
                "Database %s has more than %d rows; only the first page is used",
                database_id, self.page_size,
            )

        rows = [item_from_page(row, ctx.include_urls) for row in response.get("results", [])]
        ctx.emit("status", f"Found {len(rows)} pages in database {database_id[:8]}")
        return rows

    async def fetch_page_children(self, page_id: str, ctx: TraversalContext) -> List[RemoteItem]:
        """
        Walk every page of a page's child blocks, keeping child pages and databases.

        A failure on any page of the cursor loop discards what was collected.
        """
        children: List[RemoteItem] = []
        cursor: Optional[str] = None
        has_more = True

        ctx.emit("status", f"Fetching children for page {page_id[:8]}...")
        try:
            while has_more:
                response = await self.client.list_block_children(
                    page_id, start_cursor=cursor, page_size=self.page_size
                )
                for block in response.get("results", []):
                    child = item_from_block(block, page_id)
                    if child is None:
                        continue
                    if ctx.include_urls:
                        child = await self._with_url(child)
                    children.append(child)

                has_more = bool(response.get("has_more"))
                cursor = response.get("next_cursor")
                if has_more and not cursor:
                    logger.debug("Page %s reported more children without a cursor", page_id)
                    break
                if has_more:
                    ctx.emit("status", f"Fetching more children for page {page_id[:8]}...")
        except NotionAPIError as e:
            logger.warning("Error fetching children for page %s: %s", page_id, e)
            ctx.record_failure(page_id, NodeKind.PAGE.value, e)
            return []

        if children:
            ctx.emit(
                "status",
                f"Found {len(children)} child pages/databases in page {page_id[:8]}",
            )
        return children

    async def resolve_url(self, item: RemoteItem) -> Optional[str]:
        """
        Look up the canonical URL of a child page or database.

        Returns:
            The URL, or None when the detail fetch fails
        """
        try:
            if item.kind is NodeKind.DATABASE:
                details = await self.client.retrieve_database(item.id)
            else:
                details = await self.client.retrieve_page(item.id)
        except NotionAPIError as e:
            logger.debug("Could not resolve URL for %s %s: %s", item.kind.value, item.id, e)
            return None
        return details.get("url")

    async def _with_url(self, item: RemoteItem) -> RemoteItem:
        url = await self.resolve_url(item)
        if url is None:
            return item
        return replace(item, url=url)
