"""
Загрузка дерева шаблона из YAML/JSON-документа.

Документ описывает уже разобранное дерево: каждый узел это мапа с ключом
`type` (program, element, attr, block, component, text, mustache) и
полями соответствующего узла. JSON является подмножеством YAML, поэтому
оба формата читаются одним загрузчиком ruamel.

    type: program
    statements:
      - {type: text, chars: "foo"}
      - {type: mustache, path: bar}
      - type: element
        tag: div
        children:
          - {type: text, chars: "baz"}
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import TreeLoadError
from .nodes import (
    AttrNode,
    AttrValue,
    BlockNode,
    ComponentNode,
    ElementNode,
    MustacheNode,
    NodeType,
    ProgramNode,
    TemplateNode,
    TextNode,
)

logger = logging.getLogger(__name__)

_YAML = YAML(typ="safe")


def load_tree_file(path: Path) -> ProgramNode:
    """
    Читает файл документа дерева и строит корневой ProgramNode.

    Raises:
        TreeLoadError: Файл не найден, не разбирается или описывает
            некорректное дерево
    """
    if not path.is_file():
        raise TreeLoadError(str(path), "tree document not found")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TreeLoadError(str(path), f"cannot read tree document: {e}") from e
    return load_tree_text(text, source=str(path))


def load_tree_text(text: str, source: str = "<string>") -> ProgramNode:
    """Разбирает текст YAML/JSON и строит корневой ProgramNode."""
    try:
        data = _YAML.load(text)
    except YAMLError as e:
        raise TreeLoadError(source, f"invalid YAML/JSON: {e}") from e
    logger.debug("Loaded tree document from %s", source)
    return load_tree(data)


def load_tree(data: Any) -> ProgramNode:
    """
    Строит дерево из уже разобранных данных (dict/list/str).

    Корнем обязан быть program.
    """
    node = _build_node(data, "$")
    if not isinstance(node, ProgramNode):
        raise TreeLoadError("$", f"root node must be 'program', got '{node.node_type.value}'")
    return node


# -------------------- Builders --------------------

def _build_node(data: Any, path: str) -> TemplateNode:
    mapping = _expect_mapping(data, path)
    raw_type = mapping.get("type")
    try:
        node_type = NodeType(raw_type)
    except ValueError:
        known = ", ".join(t.value for t in NodeType)
        raise TreeLoadError(f"{path}.type", f"unknown node type {raw_type!r} (expected one of: {known})") from None

    builder = _BUILDERS[node_type]
    return builder(mapping, path)


def _build_program(data: Mapping[str, Any], path: str) -> ProgramNode:
    _check_keys(data, path, {"statements"})
    statements = [
        _build_node(item, f"{path}.statements[{i}]")
        for i, item in enumerate(_get_list(data, "statements", path))
    ]
    return ProgramNode(statements=statements)


def _build_element(data: Mapping[str, Any], path: str) -> ElementNode:
    _check_keys(data, path, {"tag", "attributes", "children", "helpers"})
    return ElementNode(
        tag=_get_str(data, "tag", path),
        attributes=_build_attributes(data, path),
        children=[
            _build_node(item, f"{path}.children[{i}]")
            for i, item in enumerate(_get_list(data, "children", path))
        ],
        helpers=[
            _build_typed(item, f"{path}.helpers[{i}]", MustacheNode)
            for i, item in enumerate(_get_list(data, "helpers", path))
        ],
    )


def _build_attr(data: Mapping[str, Any], path: str) -> AttrNode:
    _check_keys(data, path, {"name", "value"})
    raw_value = data.get("value", "")
    value: AttrValue
    if isinstance(raw_value, str):
        # Короткая запись статического значения: value: "foo"
        value = TextNode(chars=raw_value)
    else:
        built = _build_node(raw_value, f"{path}.value")
        if not isinstance(built, (TextNode, MustacheNode)):
            raise TreeLoadError(
                f"{path}.value", f"attribute value must be 'text' or 'mustache', got '{built.node_type.value}'"
            )
        value = built
    return AttrNode(name=_get_str(data, "name", path), value=value)


def _build_block(data: Mapping[str, Any], path: str) -> BlockNode:
    _check_keys(data, path, {"path", "params", "program", "inverse"})
    return BlockNode(
        path=_get_str(data, "path", path),
        params=_get_str_list(data, "params", path),
        program=_get_program(data, "program", path),
        inverse=_get_program(data, "inverse", path),
    )


def _build_component(data: Mapping[str, Any], path: str) -> ComponentNode:
    _check_keys(data, path, {"tag", "attributes", "program", "inverse"})
    return ComponentNode(
        tag=_get_str(data, "tag", path),
        attributes=_build_attributes(data, path),
        program=_get_program(data, "program", path),
        inverse=_get_program(data, "inverse", path),
    )


def _build_text(data: Mapping[str, Any], path: str) -> TextNode:
    _check_keys(data, path, {"chars"})
    return TextNode(chars=_get_str(data, "chars", path, default=""))


def _build_mustache(data: Mapping[str, Any], path: str) -> MustacheNode:
    _check_keys(data, path, {"path", "params", "escaped"})
    escaped = data.get("escaped", True)
    if not isinstance(escaped, bool):
        raise TreeLoadError(f"{path}.escaped", f"expected bool, got {type(escaped).__name__}")
    return MustacheNode(
        path=_get_str(data, "path", path),
        params=_get_str_list(data, "params", path),
        escaped=escaped,
    )


_BUILDERS: Dict[NodeType, Callable[[Mapping[str, Any], str], TemplateNode]] = {
    NodeType.PROGRAM: _build_program,
    NodeType.ELEMENT: _build_element,
    NodeType.ATTR: _build_attr,
    NodeType.BLOCK: _build_block,
    NodeType.COMPONENT: _build_component,
    NodeType.TEXT: _build_text,
    NodeType.MUSTACHE: _build_mustache,
}


# -------------------- Helpers --------------------

def _expect_mapping(data: Any, path: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TreeLoadError(path, f"expected mapping with 'type', got {type(data).__name__}")
    return data


def _check_keys(data: Mapping[str, Any], path: str, allowed: set[str]) -> None:
    # строгая проверка лишних ключей
    extras = set(data.keys()) - allowed - {"type"}
    if extras:
        raise TreeLoadError(path, f"unexpected keys: {sorted(extras)!r}")


def _get_str(data: Mapping[str, Any], key: str, path: str, default: Optional[str] = None) -> str:
    value = data.get(key, default)
    if value is None:
        raise TreeLoadError(f"{path}.{key}", "required field missing")
    if not isinstance(value, str):
        raise TreeLoadError(f"{path}.{key}", f"expected str, got {type(value).__name__}")
    return value


def _get_list(data: Mapping[str, Any], key: str, path: str) -> List[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TreeLoadError(f"{path}.{key}", f"expected list, got {type(value).__name__}")
    return value


def _get_str_list(data: Mapping[str, Any], key: str, path: str) -> List[str]:
    items = _get_list(data, key, path)
    for i, item in enumerate(items):
        if not isinstance(item, str):
            raise TreeLoadError(f"{path}.{key}[{i}]", f"expected str, got {type(item).__name__}")
    return list(items)


def _get_program(data: Mapping[str, Any], key: str, path: str) -> Optional[ProgramNode]:
    if data.get(key) is None:
        return None
    return _build_typed(data[key], f"{path}.{key}", ProgramNode)


def _build_typed(data: Any, path: str, expected: type) -> Any:
    node = _build_node(data, path)
    if not isinstance(node, expected):
        want = expected.__name__.removesuffix("Node").lower()
        raise TreeLoadError(path, f"expected '{want}' node, got '{node.node_type.value}'")
    return node


def _build_attributes(data: Mapping[str, Any], path: str) -> List[AttrNode]:
    return [
        _build_typed(item, f"{path}.attributes[{i}]", AttrNode)
        for i, item in enumerate(_get_list(data, "attributes", path))
    ]


__all__ = ["load_tree", "load_tree_text", "load_tree_file"]
