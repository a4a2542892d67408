"""
Services - Export Service

Writes rendered trees to Markdown, ASCII-tree Markdown and JSON files.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence

from notion_tree.config import get_settings
from notion_tree.schemas.tree import TreeNode
from notion_tree.services.renderers import (
    render_ascii_markdown,
    render_json,
    render_markdown,
)


logger = logging.getLogger(__name__)


def default_basename(now: Optional[datetime] = None) -> str:
    """notion-tree-<ISO timestamp> with ':' and '.' replaced by '-'."""
    now = now or datetime.now(timezone.utc)
    timestamp = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return "notion-tree-" + timestamp.replace(":", "-").replace(".", "-")


class ExportService:
    """Exports a finished tree according to the output settings."""

    def __init__(self, settings=None, output: Optional[str] = None):
        self.settings = settings or get_settings()
        self.output = output if output is not None else self.settings.output.output

    def basename(self, now: Optional[datetime] = None) -> str:
        return self.output or default_basename(now)

    def export(
        self,
        tree: Sequence[TreeNode],
        formats: Sequence[str],
        max_depth: Optional[int] = None,
        include_urls: bool = False,
        now: Optional[datetime] = None,
    ) -> List[Path]:
        """
        Write each requested file format.

        Args:
            tree: Root nodes
            formats: Any of "markdown", "json", "ascii"
            max_depth: Depth bound recorded in the JSON options
            include_urls: URL flag recorded in the JSON options
            now: Generation time (default: current time)

        Returns:
            Paths written successfully
        """
        now = now or datetime.now(timezone.utc)
        base = self.basename(now)
        local_now = now.astimezone()
        written = []

        for fmt in formats:
            if fmt == "markdown":
                path = Path(f"{base}.md")
                content = render_markdown(tree, local_now)
            elif fmt == "ascii":
                path = Path(f"{base}-ascii.md")
                content = render_ascii_markdown(tree, local_now)
            elif fmt == "json":
                path = Path(f"{base}.json")
                content = render_json(tree, now, max_depth=max_depth, include_urls=include_urls)
            else:
                raise ValueError(f"Unknown export format: {fmt}")

            try:
                path.write_text(content, encoding="utf-8")
            except OSError as e:
                logger.error("Error exporting tree to %s: %s", path, e)
                continue

            logger.info("Tree exported to %s", path)
            written.append(path)

        return written
