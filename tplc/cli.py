from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config import CompilerConfig, load_config
from .errors import TplcUserError
from .jsonic import dumps as jdumps
from .logs import setup_logging
from .report import build_report
from .template import (
    TemplateVisitError,
    action_kinds,
    compile_actions,
    format_ast_tree,
    load_tree_file,
)
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="tplc",
        description="Template action compiler (AST → ordered actions)",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--config",
        metavar="PATH",
        help="путь к tplc.yaml (по умолчанию ищется в текущем каталоге)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_actions = sub.add_parser("actions", help="JSON-отчёт: список действий для дерева")
    sp_actions.add_argument("tree", help="YAML/JSON-документ дерева шаблона")
    sp_actions.add_argument(
        "--pretty",
        action="store_true",
        help="форматированный JSON (перекрывает pretty из конфига)",
    )

    sp_tree = sub.add_parser("tree", help="Отладочный вывод дерева шаблона")
    sp_tree.add_argument("tree", help="YAML/JSON-документ дерева шаблона")

    sub.add_parser("kinds", help="Список видов действий (JSON)")

    return p


def _indent(cfg: CompilerConfig, pretty_flag: bool) -> Optional[int]:
    return cfg.indent if (pretty_flag or cfg.pretty) else None


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)

    try:
        explicit = Path(ns.config) if ns.config else None
        cfg = load_config(Path.cwd(), explicit)
        setup_logging(cfg.log_level)

        if ns.cmd == "actions":
            root = load_tree_file(Path(ns.tree))
            actions = compile_actions(root)
            report = build_report(root, actions)
            sys.stdout.write(jdumps(report.model_dump(mode="json"), indent=_indent(cfg, ns.pretty)))
            return 0

        if ns.cmd == "tree":
            root = load_tree_file(Path(ns.tree))
            sys.stdout.write(format_ast_tree(root) + "\n")
            return 0

        if ns.cmd == "kinds":
            sys.stdout.write(jdumps({"kinds": action_kinds()}, indent=_indent(cfg, False)))
            return 0

    except TplcUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except TemplateVisitError as e:
        sys.stderr.write(f"Template visit failed: {e}".rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
