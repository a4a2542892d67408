"""
Pipeline - Tree Builder

Depth-first, strictly sequential expansion of the workspace into an
ordered forest of TreeNode.
"""

import logging
from typing import List, Optional

from notion_tree.pipeline.client import BaseGraphClient, DEFAULT_PAGE_SIZE
from notion_tree.pipeline.context import TraversalContext
from notion_tree.pipeline.discovery import RootDiscovery
from notion_tree.pipeline.fetcher import ChildFetcher
from notion_tree.pipeline.normalizer import RemoteItem
from notion_tree.pipeline.progress import ProgressReporter, NullProgressReporter
from notion_tree.schemas.tree import TreeNode


logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Builds the page/database tree reachable by an integration.

    Every remote call is awaited before the next one is issued. Siblings
    keep their listing order. A node at max_depth is returned as a leaf
    without listing its children.
    """

    def __init__(
        self,
        client: BaseGraphClient,
        max_depth: Optional[int] = None,
        include_urls: bool = False,
        page_size: int = DEFAULT_PAGE_SIZE,
        reporter: Optional[ProgressReporter] = None,
    ):
        if max_depth is not None and max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        self.client = client
        self.max_depth = max_depth
        self.include_urls = include_urls
        self.reporter = reporter or NullProgressReporter()
        self.discovery = RootDiscovery(client, page_size=page_size)
        self.fetcher = ChildFetcher(client, page_size=page_size)

    def new_context(self) -> TraversalContext:
        return TraversalContext(
            max_depth=self.max_depth,
            include_urls=self.include_urls,
            reporter=self.reporter,
        )

    async def build(self, ctx: Optional[TraversalContext] = None) -> List[TreeNode]:
        """
        Discover the roots and expand each of them in turn.

        Args:
            ctx: Traversal context to fill; a fresh one is used if omitted.
                The builder's max_depth and include_urls always apply.

        Returns:
            Root nodes, pages before databases, in search order

        Raises:
            NotionAPIError: root discovery failed
        """
        if ctx is None:
            ctx = self.new_context()
        else:
            ctx.max_depth = self.max_depth
            ctx.include_urls = self.include_urls

        ctx.emit("discovery_started")
        roots = await self.discovery.discover_roots(ctx)
        ctx.emit("discovery_finished", len(roots))

        ctx.roots_total = len(roots)
        ctx.roots_done = 0
        ctx.emit("expansion_started", ctx.roots_total)

        tree: List[TreeNode] = []
        for index, item in enumerate(roots, start=1):
            ctx.emit("root_started", index, ctx.roots_total, item.title)
            tree.append(await self.expand(item, 0, ctx))
            ctx.roots_done = index
            ctx.emit("root_completed", ctx.roots_done, ctx.roots_total)

        if ctx.failures:
            logger.warning(
                "%d subtree(s) could not be listed and were left empty", len(ctx.failures)
            )
        logger.info("Built tree with %d nodes from %d roots", ctx.nodes_visited, len(tree))
        ctx.emit("finished", ctx.nodes_visited)
        return tree

    async def expand(self, item: RemoteItem, depth: int, ctx: TraversalContext) -> TreeNode:
        """Build the subtree rooted at item, which sits at the given depth."""
        node = item.to_node()
        ctx.visit()

        if ctx.at_depth_limit(depth):
            return node

        for child in await self.fetcher.fetch_children(item, ctx):
            node.add_child(await self.expand(child, depth + 1, ctx))

        return node


async def build_tree(
    client: BaseGraphClient,
    max_depth: Optional[int] = None,
    include_urls: bool = False,
    reporter: Optional[ProgressReporter] = None,
) -> List[TreeNode]:
    """Convenience wrapper around TreeBuilder.build()."""
    builder = TreeBuilder(
        client,
        max_depth=max_depth,
        include_urls=include_urls,
        reporter=reporter,
    )
    return await builder.build()
