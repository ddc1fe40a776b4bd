from __future__ import annotations

from typing import Any

from ..errors import TplcUserError


class TemplateVisitError(Exception):
    """Ошибка обхода дерева шаблона. Обход прерывается целиком."""
    pass


class UnknownNodeTypeError(TemplateVisitError):
    """Raised when the visitor meets a node it has no handler for."""
    def __init__(self, node: Any):
        self.node = node
        node_type = getattr(node, "node_type", None)
        label = node_type.value if node_type is not None and hasattr(node_type, "value") else type(node).__name__
        super().__init__(f"Unknown template node type: {label}")


class TreeLoadError(TplcUserError):
    """Raised when a tree document cannot be turned into template nodes."""
    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


__all__ = ["TemplateVisitError", "UnknownNodeTypeError", "TreeLoadError"]
