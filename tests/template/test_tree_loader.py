"""
Тесты загрузчика документов дерева (tplc/template/loader.py).
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path

import pytest

from tplc.template import (
    AttrNode,
    BlockNode,
    ComponentNode,
    ElementNode,
    MustacheNode,
    ProgramNode,
    TextNode,
    TreeLoadError,
    compile_actions,
    load_tree,
    load_tree_file,
    load_tree_text,
)
from tplc.errors import TplcUserError

from tests.infrastructure import summarize, write


class TestLoadValidDocuments:
    """Корректные документы превращаются в узлы."""

    def test_load_yaml_file(self, tree_file: Path, simple_tree):
        root = load_tree_file(tree_file)

        assert root == simple_tree
        assert summarize(compile_actions(root)) == summarize(compile_actions(simple_tree))

    def test_load_json_text(self):
        doc = {
            "type": "program",
            "statements": [
                {"type": "element", "tag": "p", "children": [{"type": "mustache", "path": "name"}]},
            ],
        }

        root = load_tree_text(json.dumps(doc))

        assert root == ProgramNode(statements=[
            ElementNode(tag="p", children=[MustacheNode(path="name")]),
        ])

    def test_load_block_with_branches(self):
        root = load_tree_text(textwrap.dedent("""
            type: program
            statements:
              - type: block
                path: if
                params: [isActive]
                program:
                  type: program
                  statements: [{type: text, chars: "on"}]
                inverse:
                  type: program
                  statements: [{type: text, chars: "off"}]
        """))

        node = root.statements[0]
        assert isinstance(node, BlockNode)
        assert node.params == ["isActive"]
        assert node.program == ProgramNode(statements=[TextNode(chars="on")])
        assert node.inverse == ProgramNode(statements=[TextNode(chars="off")])

    def test_load_component_attributes_and_helpers(self):
        root = load_tree({
            "type": "program",
            "statements": [
                {
                    "type": "element",
                    "tag": "div",
                    "attributes": [
                        {"type": "attr", "name": "id", "value": "main"},
                        {"type": "attr", "name": "class", "value": {"type": "mustache", "path": "cls"}},
                    ],
                    "helpers": [{"type": "mustache", "path": "action", "params": ["save"]}],
                },
                {"type": "component", "tag": "x-card", "program": {"type": "program"}},
                {"type": "mustache", "path": "raw", "escaped": False},
            ],
        })

        div, card, raw = root.statements
        assert div.attributes == [
            AttrNode(name="id", value=TextNode(chars="main")),
            AttrNode(name="class", value=MustacheNode(path="cls")),
        ]
        assert div.helpers == [MustacheNode(path="action", params=["save"])]
        assert card == ComponentNode(tag="x-card", program=ProgramNode())
        assert raw.escaped is False

    def test_optional_lists_default_to_empty(self):
        root = load_tree({"type": "program"})
        assert root.statements == []


class TestLoadErrors:
    """Ошибки указывают путь к проблемному месту документа."""

    def test_unknown_node_type(self):
        with pytest.raises(TreeLoadError) as exc_info:
            load_tree({"type": "program", "statements": [{"type": "comment", "value": "x"}]})

        assert exc_info.value.path == "$.statements[0].type"
        assert "unknown node type 'comment'" in str(exc_info.value)

    def test_root_must_be_program(self):
        with pytest.raises(TreeLoadError, match="root node must be 'program'"):
            load_tree({"type": "text", "chars": "x"})

    def test_node_must_be_mapping(self):
        with pytest.raises(TreeLoadError, match=r"\$\.statements\[1\]: expected mapping"):
            load_tree({"type": "program", "statements": [{"type": "text", "chars": "a"}, "b"]})

    def test_unexpected_keys(self):
        with pytest.raises(TreeLoadError, match="unexpected keys: \\['color'\\]"):
            load_tree({"type": "program", "statements": [{"type": "text", "chars": "a", "color": "red"}]})

    def test_missing_required_field(self):
        with pytest.raises(TreeLoadError, match=r"\$\.statements\[0\]\.tag: required field missing"):
            load_tree({"type": "program", "statements": [{"type": "element"}]})

    def test_wrong_list_type(self):
        with pytest.raises(TreeLoadError, match="expected list"):
            load_tree({"type": "program", "statements": {"type": "text"}})

    def test_attribute_value_must_be_text_or_mustache(self):
        with pytest.raises(TreeLoadError, match="attribute value must be 'text' or 'mustache'"):
            load_tree({
                "type": "program",
                "statements": [{
                    "type": "element",
                    "tag": "a",
                    "attributes": [{"type": "attr", "name": "x", "value": {"type": "program"}}],
                }],
            })

    def test_helpers_must_be_mustaches(self):
        with pytest.raises(TreeLoadError, match="expected 'mustache' node, got 'text'"):
            load_tree({
                "type": "program",
                "statements": [{"type": "element", "tag": "a", "helpers": [{"type": "text", "chars": "x"}]}],
            })

    def test_block_branch_must_be_program(self):
        with pytest.raises(TreeLoadError, match=r"\.program: expected 'program' node"):
            load_tree({
                "type": "program",
                "statements": [{"type": "block", "path": "if", "program": {"type": "text", "chars": "x"}}],
            })

    def test_escaped_must_be_bool(self):
        with pytest.raises(TreeLoadError, match="expected bool"):
            load_tree({"type": "program", "statements": [{"type": "mustache", "path": "x", "escaped": "no"}]})

    def test_invalid_yaml(self):
        with pytest.raises(TreeLoadError, match="invalid YAML/JSON"):
            load_tree_text("type: program\nstatements: [unclosed\n")

    def test_empty_document(self):
        with pytest.raises(TreeLoadError, match="expected mapping"):
            load_tree_text("")

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(TreeLoadError, match="tree document not found"):
            load_tree_file(tmp_path / "absent.yaml")

    def test_load_error_is_user_error(self, tmp_path: Path):
        bad = write(tmp_path / "bad.yaml", "type: nope\n")

        with pytest.raises(TplcUserError):
            load_tree_file(bad)

    def test_file_not_utf8(self, tmp_path: Path):
        bad = tmp_path / "latin.yaml"
        bad.write_bytes(b'type: program\nstatements:\n  - {type: text, chars: "\xff\xfe"}\n')

        with pytest.raises(TreeLoadError, match="cannot read tree document") as exc_info:
            load_tree_file(bad)

        assert exc_info.value.path == str(bad)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_unknown_type_is_not_chained(self):
        with pytest.raises(TreeLoadError) as exc_info:
            load_tree({"type": "program", "statements": [{"type": "comment"}]})

        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__ is True
