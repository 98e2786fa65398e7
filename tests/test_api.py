"""Unit tests for the public API functions."""

from __future__ import annotations

import pytest

import docsync
from docsync import (
    ParseError,
    SerializationError,
    SyncConfig,
    SyncedEditor,
    TemplateError,
    dump_tree,
    open_editor,
    parse_text,
    render_template,
)


class TestParseText:
    def test_parses_yaml(self) -> None:
        assert parse_text("a:\n  - 1\n  - x\n") == {"a": [1, "x"]}

    def test_empty_is_empty_map(self) -> None:
        assert parse_text("") == {}

    def test_invalid_raises(self) -> None:
        with pytest.raises(ParseError):
            parse_text("a: [1, 2")


class TestDumpTree:
    def test_dumps_yaml(self) -> None:
        assert dump_tree({"a": {"b": 1}}) == "a:\n  b: 1\n"

    def test_honours_indent(self) -> None:
        assert dump_tree({"a": {"b": 1}}, SyncConfig(indent=4)) == "a:\n    b: 1\n"

    def test_unserializable_raises(self) -> None:
        with pytest.raises(SerializationError):
            dump_tree({"a": object()})


class TestOpenEditor:
    def test_returns_active_editor(self) -> None:
        editor = open_editor("a: 1\n")
        assert isinstance(editor, SyncedEditor)
        assert editor.is_active
        assert editor.get_tree() == {"a": 1}
        editor.destroy()

    def test_forwards_keyword_arguments(self) -> None:
        editor = open_editor(config=SyncConfig(indent=4))
        editor.set_tree({"a": {"b": 1}})
        assert editor.get_text() == "a:\n    b: 1\n"


class TestRenderTemplate:
    def test_renders(self) -> None:
        assert render_template("Hi {{name}}", {"name": "Ada"}) == "Hi Ada"

    def test_missing_raises(self) -> None:
        with pytest.raises(TemplateError):
            render_template("Hi {{name}}", {})


class TestPackageExports:
    def test_all_names_importable(self) -> None:
        for name in docsync.__all__:
            assert hasattr(docsync, name), name
