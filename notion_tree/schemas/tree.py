"""
Schemas - Tree Models

Pydantic models for the discovered page/database hierarchy.
"""

from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional


class NodeKind(str, Enum):
    """Kind of a discovered item."""
    PAGE = "page"
    DATABASE = "database"


class TreeNode(BaseModel):
    """Workspace hierarchy tree node."""
    id: str
    title: str = Field(min_length=1)
    kind: NodeKind = Field(serialization_alias="type")
    url: Optional[str] = None
    children: List["TreeNode"] = []

    @property
    def is_database(self) -> bool:
        return self.kind is NodeKind.DATABASE

    def add_child(self, node: "TreeNode") -> None:
        """Append a child in discovery order."""
        self.children.append(node)


# Allow recursive model
TreeNode.model_rebuild()
