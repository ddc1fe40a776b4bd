"""
Компилятор дерева шаблона в плоский список действий.

Визитор обходит AST в глубину и в обратном порядке детей, собирая
действия для генератора кода.
"""

from __future__ import annotations

from .actions import Action, ActionKind, action_kinds
from .errors import TemplateVisitError, TreeLoadError, UnknownNodeTypeError
from .frame import FlushTarget, Frame
from .loader import load_tree, load_tree_file, load_tree_text
from .nodes import (
    AttrNode,
    BlockNode,
    ComponentNode,
    ElementNode,
    MustacheNode,
    NodeType,
    ProgramNode,
    TemplateNode,
    TextNode,
    format_ast_tree,
    iter_node_paths,
)
from .visitor import TemplateVisitor, compile_actions

__all__ = [
    "Action",
    "ActionKind",
    "action_kinds",
    "TemplateVisitError",
    "TreeLoadError",
    "UnknownNodeTypeError",
    "FlushTarget",
    "Frame",
    "load_tree",
    "load_tree_file",
    "load_tree_text",
    "AttrNode",
    "BlockNode",
    "ComponentNode",
    "ElementNode",
    "MustacheNode",
    "NodeType",
    "ProgramNode",
    "TemplateNode",
    "TextNode",
    "format_ast_tree",
    "iter_node_paths",
    "TemplateVisitor",
    "compile_actions",
]
