import textwrap
from pathlib import Path

import pytest

from tests.infrastructure import block, element, mustache, program, text, write


@pytest.fixture
def simple_tree():
    """foo{{bar}}<div>baz</div>"""
    return program(text("foo"), mustache("bar"), element("div", text("baz")))


@pytest.fixture
def if_else_tree():
    """<div>{{#if}}foo{{else}}bar<b></b>{{/if}}</div>"""
    return program(
        element(
            "div",
            block(
                "if",
                body=program(text("foo")),
                inverse=program(text("bar"), element("b")),
            ),
        )
    )


@pytest.fixture
def tree_file(tmp_path: Path) -> Path:
    """Документ дерева для foo{{bar}}<div>baz</div> в tmp_path/tree.yaml."""
    return write(
        tmp_path / "tree.yaml",
        textwrap.dedent("""
        type: program
        statements:
          - {type: text, chars: "foo"}
          - {type: mustache, path: bar}
          - type: element
            tag: div
            children:
              - {type: text, chars: "baz"}
        """).strip() + "\n",
    )


@pytest.fixture(autouse=True)
def _no_debug_env(monkeypatch):
    # TPLC_DEBUG из окружения разработчика не должен влиять на тесты
    monkeypatch.delenv("TPLC_DEBUG", raising=False)
