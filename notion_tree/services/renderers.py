"""
Services - Renderers

Pure formatting of a finished tree: console, Markdown, ASCII-tree
Markdown and JSON.
"""

import json
from datetime import datetime
from typing import Iterator, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.text import Text

from notion_tree.schemas.tree import TreeNode


BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE = "│   "
SPACE = "    "

DATABASE_SUFFIX = " (Database)"


def display_title(node: TreeNode) -> str:
    """Title with the database suffix where relevant."""
    if node.is_database:
        return f"{node.title}{DATABASE_SUFFIX}"
    return node.title


def iter_tree_lines(
    nodes: Sequence[TreeNode],
    prefix: str = "",
) -> Iterator[Tuple[str, TreeNode]]:
    """Yield (guide, node) pairs in pre-order, guide ending with the connector."""
    for i, node in enumerate(nodes):
        is_last = i == len(nodes) - 1
        yield prefix + (LAST_BRANCH if is_last else BRANCH), node
        if node.children:
            yield from iter_tree_lines(node.children, prefix + (SPACE if is_last else PIPE))


def render_console(nodes: Sequence[TreeNode], console: Optional[Console] = None) -> None:
    """Print the tree with pages in green and databases in cyan."""
    console = console or Console()
    for guide, node in iter_tree_lines(nodes):
        style = "cyan" if node.is_database else "green"
        console.print(Text.assemble(guide, (display_title(node), style)))


def _generated_on(generated_at: datetime) -> str:
    return generated_at.strftime("%Y-%m-%d %H:%M:%S")


def render_markdown(nodes: Sequence[TreeNode], generated_at: datetime) -> str:
    """Nested bullet list, linking titles when a URL is known."""
    lines = [
        "# Notion Workspace Structure",
        "",
        f"Generated on: {_generated_on(generated_at)}",
        "",
    ]

    def walk(level_nodes: Sequence[TreeNode], level: int) -> None:
        for node in level_nodes:
            label = display_title(node)
            if node.url:
                label = f"[{label}]({node.url})"
            lines.append(f"{'  ' * level}- {label}")
            walk(node.children, level + 1)

    walk(nodes, 0)
    return "\n".join(lines) + "\n"


def render_ascii_markdown(nodes: Sequence[TreeNode], generated_at: datetime) -> str:
    """
    ASCII tree in a fenced block with numbered URL footnotes.

    Footnote numbers count URL-bearing nodes in pre-order, so each
    "[n]" marker matches its entry under "### Links".
    """
    lines = [
        "# Notion Workspace Structure - ASCII Tree",
        "",
        f"Generated on: {_generated_on(generated_at)}",
        "",
        "```",
    ]
    footnotes: List[str] = []

    for guide, node in iter_tree_lines(nodes):
        label = display_title(node)
        if node.url:
            footnotes.append(node.url)
            label += f" [{len(footnotes)}]"
        lines.append(f"{guide}{label}")

    lines.append("```")
    lines.append("")

    if footnotes:
        lines.append("### Links")
        lines.append("")
        lines.extend(f"[{n}]: {url}" for n, url in enumerate(footnotes, start=1))

    return "\n".join(lines) + "\n"


def tree_to_dicts(nodes: Sequence[TreeNode]) -> List[dict]:
    return [node.model_dump(mode="json", by_alias=True) for node in nodes]


def render_json(
    nodes: Sequence[TreeNode],
    generated_at: datetime,
    max_depth: Optional[int] = None,
    include_urls: bool = False,
) -> str:
    """JSON document with generation time, traversal options and the tree."""
    data = {
        "generated": generated_at.isoformat(),
        "options": {
            "maxDepth": max_depth,
            "includeUrls": include_urls,
        },
        "tree": tree_to_dicts(nodes),
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
