"""
Actions emitted by the template visitor.

An action is one instruction for the downstream code generator: a kind
plus a positional argument tuple. Positions inside the arguments are
0-based forward indices into the source child list.

    kind            arguments
    startProgram    node, child_template_count
    endProgram      node
    openElement     node, child_index, child_count, is_single_root, mustache_count
    closeElement    node, child_index, child_count, is_single_root
    text            node, child_index, child_count, is_single_root
    mustache        node, child_index, child_count
    block           node, child_index, child_count
    component       node, child_index, child_count
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterator, List, Tuple

from .nodes import TemplateNode


class ActionKind(enum.Enum):
    START_PROGRAM = "startProgram"
    END_PROGRAM = "endProgram"
    OPEN_ELEMENT = "openElement"
    CLOSE_ELEMENT = "closeElement"
    TEXT = "text"
    MUSTACHE = "mustache"
    BLOCK = "block"
    COMPONENT = "component"


@dataclass(frozen=True)
class Action:
    """
    Single (kind, args) entry of the action list.

    The first argument is always the node the action refers to.
    Unpacks like a pair: ``kind, args = action``.
    """
    kind: ActionKind
    args: Tuple[Any, ...]

    @property
    def node(self) -> TemplateNode:
        return self.args[0]

    def __iter__(self) -> Iterator[Any]:
        yield self.kind
        yield self.args

    def as_pair(self) -> Tuple[str, List[Any]]:
        """Plain ``(kind-name, [args...])`` form, as the generator consumes it."""
        return self.kind.value, list(self.args)


def action_kinds() -> List[str]:
    """Wire names of all action kinds, in declaration order."""
    return [kind.value for kind in ActionKind]


__all__ = ["ActionKind", "Action", "action_kinds"]
