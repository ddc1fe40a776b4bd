"""
AST-узлы шаблона.

Определяет иерархию неизменяемых классов узлов, которые обходит
TemplateVisitor. Узлы строятся внешним парсером (или загрузчиком
документов дерева) и визитором только читаются.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple, Union


class NodeType(enum.Enum):
    """Дискриминант вида узла, по которому визитор выбирает обработчик."""
    PROGRAM = "program"
    ELEMENT = "element"
    ATTR = "attr"
    BLOCK = "block"
    COMPONENT = "component"
    TEXT = "text"
    MUSTACHE = "mustache"


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс для всех узлов AST шаблона."""

    @property
    def node_type(self) -> Optional[NodeType]:
        # Конкретные узлы переопределяют; у базового узла вида нет
        return None


@dataclass(frozen=True)
class TextNode(TemplateNode):
    """
    Статический текст шаблона.

    Выводится как есть; содержимое для визитора непрозрачно.
    """
    chars: str

    @property
    def node_type(self) -> NodeType:
        return NodeType.TEXT


@dataclass(frozen=True)
class MustacheNode(TemplateNode):
    """
    Интерполяция {{path param ...}}.

    Единица динамического контента: увеличивает счётчик mustache
    текущего фрейма.
    """
    path: str
    params: List[str] = field(default_factory=list)
    escaped: bool = True

    @property
    def node_type(self) -> NodeType:
        return NodeType.MUSTACHE


# Значение атрибута: статический текст или динамическая привязка
AttrValue = Union[TextNode, MustacheNode]


@dataclass(frozen=True)
class AttrNode(TemplateNode):
    """
    Атрибут элемента name="value".

    Динамическим считается атрибут, значение которого является MustacheNode.
    """
    name: str
    value: AttrValue

    @property
    def node_type(self) -> NodeType:
        return NodeType.ATTR

    @property
    def is_dynamic(self) -> bool:
        return isinstance(self.value, MustacheNode)


@dataclass(frozen=True)
class ProgramNode(TemplateNode):
    """
    Шаблон: корневой или вложенный (тело/else-ветка блока).

    Каждый ProgramNode компилируется как самостоятельная единица.
    """
    statements: List[TemplateNode] = field(default_factory=list)

    @property
    def node_type(self) -> NodeType:
        return NodeType.PROGRAM


@dataclass(frozen=True)
class ElementNode(TemplateNode):
    """
    HTML-элемент <tag attr=...>children</tag>.

    helpers: mustache-выражения на уровне элемента (<div {{action}}>),
    каждое из них считается одной динамической привязкой.
    """
    tag: str
    attributes: List[AttrNode] = field(default_factory=list)
    children: List[TemplateNode] = field(default_factory=list)
    helpers: List[MustacheNode] = field(default_factory=list)

    @property
    def node_type(self) -> NodeType:
        return NodeType.ELEMENT


@dataclass(frozen=True)
class BlockNode(TemplateNode):
    """
    Блок {{#path params}}program{{else}}inverse{{/path}}.

    Собственного списка детей не имеет: содержимое живёт во вложенных
    шаблонах program и inverse.
    """
    path: str
    params: List[str] = field(default_factory=list)
    program: Optional[ProgramNode] = None
    inverse: Optional[ProgramNode] = None

    @property
    def node_type(self) -> NodeType:
        return NodeType.BLOCK


@dataclass(frozen=True)
class ComponentNode(TemplateNode):
    """
    Компонент <my-widget attr=...>program</my-widget>.

    Обходится так же, как BlockNode.
    """
    tag: str
    attributes: List[AttrNode] = field(default_factory=list)
    program: Optional[ProgramNode] = None
    inverse: Optional[ProgramNode] = None

    @property
    def node_type(self) -> NodeType:
        return NodeType.COMPONENT


def iter_node_paths(node: TemplateNode, path: str = "$") -> Iterator[Tuple[str, TemplateNode]]:
    """
    Обходит дерево в порядке исходника, выдавая пары (путь, узел).

    Путь строится по именам полей: $.statements[2].children[0],
    $.statements[0].program.statements[1] и т.п.
    """
    yield path, node
    if isinstance(node, ProgramNode):
        for i, stmt in enumerate(node.statements):
            yield from iter_node_paths(stmt, f"{path}.statements[{i}]")
    elif isinstance(node, ElementNode):
        for i, attr in enumerate(node.attributes):
            yield from iter_node_paths(attr, f"{path}.attributes[{i}]")
        for i, helper in enumerate(node.helpers):
            yield from iter_node_paths(helper, f"{path}.helpers[{i}]")
        for i, child in enumerate(node.children):
            yield from iter_node_paths(child, f"{path}.children[{i}]")
    elif isinstance(node, (BlockNode, ComponentNode)):
        if isinstance(node, ComponentNode):
            for i, attr in enumerate(node.attributes):
                yield from iter_node_paths(attr, f"{path}.attributes[{i}]")
        if node.program is not None:
            yield from iter_node_paths(node.program, f"{path}.program")
        if node.inverse is not None:
            yield from iter_node_paths(node.inverse, f"{path}.inverse")
    elif isinstance(node, AttrNode):
        yield from iter_node_paths(node.value, f"{path}.value")


def _describe(node: TemplateNode) -> str:
    if isinstance(node, TextNode):
        return f"text {node.chars!r}"
    if isinstance(node, MustacheNode):
        args = " ".join([node.path, *node.params])
        return f"mustache {{{{{args}}}}}" if node.escaped else f"mustache {{{{{{{args}}}}}}}"
    if isinstance(node, AttrNode):
        return f"attr {node.name}" + (" (dynamic)" if node.is_dynamic else "")
    if isinstance(node, ElementNode):
        suffix = f" helpers={len(node.helpers)}" if node.helpers else ""
        return f"element <{node.tag}>{suffix}"
    if isinstance(node, BlockNode):
        return f"block #{' '.join([node.path, *node.params])}"
    if isinstance(node, ComponentNode):
        return f"component <{node.tag}>"
    if isinstance(node, ProgramNode):
        return f"program ({len(node.statements)} statements)"
    return type(node).__name__


def format_ast_tree(node: TemplateNode, indent: int = 0) -> str:
    """
    Форматирует дерево для отладочного вывода (команда `tplc tree`).

    Args:
        node: Корень поддерева
        indent: Начальный уровень отступа

    Returns:
        Многострочное представление, по узлу на строку
    """
    pad = "  " * indent
    lines = [pad + _describe(node)]
    if isinstance(node, ProgramNode):
        for stmt in node.statements:
            lines.append(format_ast_tree(stmt, indent + 1))
    elif isinstance(node, ElementNode):
        for attr in node.attributes:
            lines.append(format_ast_tree(attr, indent + 1))
        for child in node.children:
            lines.append(format_ast_tree(child, indent + 1))
    elif isinstance(node, (BlockNode, ComponentNode)):
        if isinstance(node, ComponentNode):
            for attr in node.attributes:
                lines.append(format_ast_tree(attr, indent + 1))
        if node.program is not None:
            lines.append(pad + "  program:")
            lines.append(format_ast_tree(node.program, indent + 2))
        if node.inverse is not None:
            lines.append(pad + "  inverse:")
            lines.append(format_ast_tree(node.inverse, indent + 2))
    return "\n".join(lines)


__all__ = [
    "NodeType",
    "TemplateNode",
    "TextNode",
    "MustacheNode",
    "AttrValue",
    "AttrNode",
    "ProgramNode",
    "ElementNode",
    "BlockNode",
    "ComponentNode",
    "iter_node_paths",
    "format_ast_tree",
]
