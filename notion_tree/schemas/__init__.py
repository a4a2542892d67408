"""
Schemas Module - Pydantic Models

Data models for the workspace tree.
"""

from notion_tree.schemas.tree import NodeKind, TreeNode

__all__ = [
    "NodeKind",
    "TreeNode",
]
