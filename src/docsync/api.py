"""Stateless convenience functions over the docsync building blocks."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from docsync.codecs import YamlCodec
from docsync.config import SyncConfig
from docsync.editor import SyncedEditor
from docsync.template import TemplateRenderer

if TYPE_CHECKING:
    from docsync.result import ChangeNotification

__all__ = ["dump_tree", "open_editor", "parse_text", "render_template"]


def parse_text(text: str, config: SyncConfig | None = None) -> Any:
    """Parse YAML ``text`` into a Document; empty text gives ``{}``.

    Raises:
        ParseError: If ``text`` is not valid YAML.
    """
    tree = YamlCodec(config).parse(text)
    return {} if tree is None else tree


def dump_tree(tree: Any, config: SyncConfig | None = None) -> str:
    """Serialize ``tree`` to YAML text.

    Raises:
        SerializationError: If ``tree`` is cyclic or holds unrepresentable values.
    """
    return YamlCodec(config).dump(tree)


def open_editor(
    initial_text: str = "",
    on_change: Callable[[ChangeNotification], None] | None = None,
    **kwargs: Any,
) -> SyncedEditor:
    """Create and activate a ``SyncedEditor``.

    Extra keyword arguments are forwarded to ``SyncedEditor``.
    """
    editor = SyncedEditor(initial_text, on_change=on_change, **kwargs)
    editor.activate()
    return editor


def render_template(template: str, document: Any, max_depth: int = 10) -> str:
    """Substitute ``{{path}}`` placeholders in ``template`` from ``document``.

    Raises:
        TemplateError: If the template is empty or references missing fields.
    """
    return TemplateRenderer(template, max_depth=max_depth).render(document)
