"""
Services Module - Output Layer

Renders finished trees and writes export files.
"""

from notion_tree.services.export_service import ExportService
from notion_tree.services.renderers import (
    render_console,
    render_markdown,
    render_ascii_markdown,
    render_json,
)

__all__ = [
    "ExportService",
    "render_console",
    "render_markdown",
    "render_ascii_markdown",
    "render_json",
]
