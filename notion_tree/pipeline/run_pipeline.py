"""
Pipeline - Run Pipeline

Orchestrates a full run: build the tree, then display and export it.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from rich.console import Console

from notion_tree.config import get_settings
from notion_tree.pipeline.client import BaseGraphClient, NotionAPIError, NotionClient, NotionUnauthorizedError
from notion_tree.pipeline.progress import NullProgressReporter, ProgressReporter, SpinnerProgressReporter
from notion_tree.pipeline.traversal import TreeBuilder
from notion_tree.schemas.tree import TreeNode
from notion_tree.services.export_service import ExportService
from notion_tree.services.renderers import render_console


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1


class MissingCredentialsError(RuntimeError):
    """NOTION_API_KEY is not configured."""


def export_formats(fmt: str, ascii_tree: bool) -> List[str]:
    """File formats to write for a --format value."""
    formats = []
    if fmt in ("markdown", "all"):
        formats.append("markdown")
    if fmt in ("json", "all"):
        formats.append("json")
    if ascii_tree:
        formats.append("ascii")
    return formats


class TreeRunner:
    """Runs discovery, traversal, display and export."""

    def __init__(
        self,
        settings=None,
        console: Optional[Console] = None,
        client: Optional[BaseGraphClient] = None,
    ):
        self.settings = settings or get_settings()
        self.console = console or Console()
        self.err_console = Console(stderr=True)
        self._client = client

    def make_reporter(self, quiet: bool) -> ProgressReporter:
        if quiet:
            return NullProgressReporter()
        return SpinnerProgressReporter(self.err_console)

    async def build(
        self,
        max_depth: Optional[int] = None,
        include_urls: bool = False,
        reporter: Optional[ProgressReporter] = None,
    ) -> List[TreeNode]:
        """
        Build the workspace tree.

        Raises:
            MissingCredentialsError: no API key and no injected client
            NotionAPIError: root discovery failed
        """
        client = self._client
        owns_client = client is None
        if owns_client:
            if not self.settings.notion.api_key:
                raise MissingCredentialsError("NOTION_API_KEY is not set")
            client = NotionClient(self.settings)

        builder = TreeBuilder(
            client,
            max_depth=max_depth,
            include_urls=include_urls,
            page_size=self.settings.tree.page_size,
            reporter=reporter,
        )
        try:
            return await builder.build()
        finally:
            if owns_client:
                await client.aclose()

    async def run(
        self,
        fmt: Optional[str] = None,
        ascii_tree: Optional[bool] = None,
        max_depth: Optional[int] = None,
        include_urls: Optional[bool] = None,
        output: Optional[str] = None,
        quiet: bool = False,
    ) -> int:
        """
        Run end to end and return the process exit status.

        Unset arguments fall back to settings.
        """
        fmt = fmt or self.settings.output.format
        ascii_tree = self.settings.output.ascii if ascii_tree is None else ascii_tree
        max_depth = self.settings.tree.max_depth if max_depth is None else max_depth
        include_urls = self.settings.tree.include_urls if include_urls is None else include_urls

        reporter = self.make_reporter(quiet)
        if not quiet:
            self.err_console.print("Generating Notion page tree...", style="blue")

        try:
            tree = await self.build(max_depth, include_urls, reporter)
        except MissingCredentialsError:
            self.err_console.print("Error: NOTION_API_KEY is not set in .env file", style="red")
            self.err_console.print(
                "Please create a .env file with your Notion API key:", style="yellow"
            )
            self.err_console.print(
                "NOTION_API_KEY=your_notion_integration_token_here", markup=False, highlight=False
            )
            return EXIT_FATAL
        except NotionAPIError as e:
            logger.debug("Root discovery failed", exc_info=True)
            self.err_console.print(f"Error generating tree: {e.message}", style="red", markup=False)
            if isinstance(e, NotionUnauthorizedError):
                self.err_console.print(
                    "Make sure your Notion API key is correct and the integration "
                    "has the necessary permissions.",
                    style="yellow",
                )
            return EXIT_FATAL
        finally:
            reporter.stop()

        if fmt in ("console", "all"):
            render_console(tree, self.console)

        formats = export_formats(fmt, ascii_tree)
        if formats:
            exporter = ExportService(self.settings, output=output)
            for path in exporter.export(
                tree,
                formats,
                max_depth=max_depth,
                include_urls=include_urls,
                now=datetime.now(timezone.utc),
            ):
                self.err_console.print(f"Tree exported to {path}", style="green", markup=False)

        if not quiet:
            self.err_console.print("Tree generation complete!", style="green")
        return EXIT_OK
