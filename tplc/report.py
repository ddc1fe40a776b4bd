"""
JSON report for the `tplc actions` command.

Nodes are not serializable, so every action refers to its node by the
node's path in the tree ($.statements[2].children[0]). The remaining
arguments are emitted as-is.
"""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from .template.actions import Action, ActionKind
from .template.nodes import ProgramNode, iter_node_paths
from .version import tool_version


class ActionEntry(BaseModel):
    kind: str
    node: str = Field(description="Path of the node in the tree document")
    args: List[Any] = Field(default_factory=list, description="Arguments after the node")


class ActionsReport(BaseModel):
    tool_version: str
    template_count: int
    action_count: int
    actions: List[ActionEntry]


def build_report(root: ProgramNode, actions: List[Action]) -> ActionsReport:
    """
    Собирает отчёт по списку действий, полученному для дерева root.

    Путь узла определяется по самому объекту, поэтому один и тот же
    объект узла не может стоять в дереве в двух местах.

    Raises:
        ValueError: Если действие ссылается на узел, которого нет в root,
            или если объект узла встречается в дереве дважды
    """
    # Узлы неизменяемы и сравниваются по значению, поэтому ищем по id()
    paths: Dict[int, str] = {}
    for path, node in iter_node_paths(root):
        seen = paths.setdefault(id(node), path)
        if seen != path:
            raise ValueError(f"Node object is shared between {seen} and {path}; report trees must not share nodes")

    entries: List[ActionEntry] = []
    for action in actions:
        node_path = paths.get(id(action.node))
        if node_path is None:
            raise ValueError(f"Action '{action.kind.value}' refers to a node outside of the tree")
        entries.append(ActionEntry(kind=action.kind.value, node=node_path, args=list(action.args[1:])))

    return ActionsReport(
        tool_version=tool_version(),
        template_count=sum(1 for a in actions if a.kind is ActionKind.START_PROGRAM),
        action_count=len(entries),
        actions=entries,
    )


__all__ = ["ActionEntry", "ActionsReport", "build_report"]
