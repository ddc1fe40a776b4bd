"""
tplc: compiles template syntax trees into ordered action lists
for a code generator.
"""

from .template import ProgramNode, TemplateVisitor, compile_actions
from .version import tool_version

__all__ = ["ProgramNode", "TemplateVisitor", "compile_actions", "tool_version"]
