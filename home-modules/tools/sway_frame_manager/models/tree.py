"""Sway container tree model.

A TreeNode mirrors one node of the JSON returned by `swaymsg -t get_tree`.
Only the fields this package needs are typed; anything else sway sends is
ignored. Snapshots are frozen: they are built fresh per query and thrown
away afterwards.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class NodeType(str, Enum):
    """Sway node types."""
    ROOT = "root"
    OUTPUT = "output"
    WORKSPACE = "workspace"
    CON = "con"
    FLOATING_CON = "floating_con"
    DOCKAREA = "dockarea"
    OTHER = "other"


# Older tooling and hand-written fixtures say "container" for "con"
_TYPE_ALIASES = {"container": NodeType.CON}


class TreeNode(BaseModel):
    """One node of a sway tree snapshot.

    A node is a content container iff it has no children and is not a
    workspace. Empty workspaces (e.g. the scratchpad) therefore never count
    as content.

    Examples:
        >>> node = TreeNode.model_validate({"id": 7, "type": "con", "window": 42})
        >>> node.is_content
        True
        >>> TreeNode.model_validate({"id": 3, "type": "workspace"}).is_content
        False
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = Field(..., description="Sway container id, unique within a snapshot")
    type: NodeType = Field(NodeType.OTHER, description="Node type")
    nodes: List[TreeNode] = Field(default_factory=list, description="Tiling children in layout order")
    window: Optional[int] = Field(None, description="X11 window id (XWayland clients only)")
    visible: bool = Field(False, description="Whether the view is currently visible")
    focused: bool = Field(False, description="Whether the node has focus")

    name: Optional[str] = Field(None, description="Title or workspace/output name")
    app_id: Optional[str] = Field(None, description="Wayland app_id")
    pid: Optional[int] = Field(None, description="Client process id")
    marks: List[str] = Field(default_factory=list, description="Container marks")

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        """Map aliases and unknown node types onto NodeType."""
        if isinstance(v, NodeType) or not isinstance(v, str):
            return v
        if v in _TYPE_ALIASES:
            return _TYPE_ALIASES[v]
        try:
            return NodeType(v)
        except ValueError:
            return NodeType.OTHER

    @field_validator("visible", "focused", mode="before")
    @classmethod
    def null_as_false(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("marks", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def is_content(self) -> bool:
        """True for leaf content containers."""
        return not self.nodes and self.type != NodeType.WORKSPACE

    def label(self) -> str:
        """Short human-readable description used by the CLI."""
        text = f"#{self.id} {self.type.value}"
        if self.name:
            text += f" {self.name!r}"
        if self.window is not None:
            text += f" window={self.window}"
        return text


TreeNode.model_rebuild()
