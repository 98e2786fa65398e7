"""YamlCodec: the default text <-> tree codec, built on PyYAML.

Parsing uses ``yaml.safe_load`` so untrusted text can never construct
arbitrary Python objects.  Dumping uses a SafeDumper subclass that:

- keeps map insertion order (``sort_keys=False``),
- indents block sequences under their parent key (``key:\\n  - item``),
- never emits anchors/aliases when ``no_refs`` is set, so a sub-tree shared
  by reference is written out in full at every occurrence,
- never wraps long scalars when the configured line width is negative.

This backend satisfies the ``Codec`` Protocol structurally.
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

from docsync.codecs.base import ensure_acyclic
from docsync.config import SyncConfig
from docsync.errors import ParseError, SerializationError

logger = logging.getLogger(__name__)


class _BlockDumper(yaml.SafeDumper):
    """SafeDumper that indents sequences nested in mappings."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        super().increase_indent(flow, False)


class _NoRefsDumper(_BlockDumper):
    """_BlockDumper that never writes anchors or aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


class YamlCodec:
    """PyYAML-backed codec honouring ``SyncConfig`` formatting options.

    Example::

        from docsync.codecs import YamlCodec

        codec = YamlCodec()
        codec.dump({"items": ["a", "b"]})   # "items:\\n  - a\\n  - b\\n"
        codec.parse("a: 1")                 # {"a": 1}
    """

    def __init__(self, config: SyncConfig | None = None) -> None:
        self._config = config if config is not None else SyncConfig()
        self._dumper = _NoRefsDumper if self._config.no_refs else _BlockDumper

    def parse(self, text: str) -> Any:
        """Parse YAML ``text`` into a Document.

        Returns ``None`` for empty or comment-only text.

        Raises:
            ParseError: If ``text`` is not a single well-formed YAML document.
        """
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            logger.debug("YAML parse failed: %s", exc)
            raise ParseError(str(exc)) from exc

    def dump(self, tree: Any) -> str:
        """Serialize ``tree`` into YAML text.

        Raises:
            SerializationError: If ``tree`` is cyclic or holds values the
                safe representer cannot encode.
        """
        ensure_acyclic(tree)
        width = float("inf") if self._config.unlimited_width else self._config.line_width
        try:
            return yaml.dump(
                tree,
                Dumper=self._dumper,
                indent=self._config.indent,
                width=width,
                allow_unicode=True,
                sort_keys=False,
                default_flow_style=False,
            )
        except yaml.YAMLError as exc:
            logger.debug("YAML dump failed: %s", exc)
            raise SerializationError(str(exc)) from exc
