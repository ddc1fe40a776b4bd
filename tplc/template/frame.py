"""
Traversal frame for the template visitor.

One frame exists per composite node (program or element) that is
currently being visited. The frame for a node is pushed when the visitor
enters it and popped when the visitor leaves it.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional

from .actions import Action
from .nodes import ProgramNode, TemplateNode


class FlushTarget(enum.Enum):
    """Where a finished frame's actions go once the frame is popped."""
    # Reversed and appended to the visitor's global action list
    GLOBAL = "global"
    # Appended as-is to the enclosing frame's actions
    PARENT = "parent"


@dataclass
class Frame:
    """
    Traversal state of one composite node.

    child_index/child_count describe the child of owner_node that is being
    visited right now, not the position of owner_node itself (that lives in
    the enclosing frame).
    """
    owner_node: Optional[TemplateNode] = None
    flush_target: FlushTarget = FlushTarget.PARENT
    child_index: Optional[int] = None
    child_count: Optional[int] = None
    child_template_count: int = 0   # nested programs seen under this frame
    mustache_count: int = 0         # dynamic content seen directly under this frame
    actions: List[Action] = field(default_factory=list)

    @property
    def owned_by_program(self) -> bool:
        return isinstance(self.owner_node, ProgramNode)

    @property
    def is_single_root(self) -> bool:
        """True while visiting the only statement of a program."""
        return self.owned_by_program and self.child_count == 1


__all__ = ["FlushTarget", "Frame"]
