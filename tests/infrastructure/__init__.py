"""
Unified test infrastructure for tplc.

Modules:
- file_utils: Utilities for creating files and directories
- cli_utils: Running the CLI in a subprocess
- tree_builders: Short constructors for template trees
- action_utils: Helpers for asserting on action lists
"""

from .file_utils import write, write_yaml
from .cli_utils import run_cli, jload
from .action_utils import summarize, nodes_of
from .tree_builders import program, text, mustache, attr, element, block, component

__all__ = [
    # File utilities
    "write", "write_yaml",

    # CLI utilities
    "run_cli", "jload",

    # Action list utilities
    "summarize", "nodes_of",

    # Tree builders
    "program", "text", "mustache", "attr", "element", "block", "component",
]
