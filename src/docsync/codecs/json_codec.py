"""JsonCodec: a strict JSON text <-> tree codec using the standard library.

Useful when the serialized surface must stay machine-oriented.  Parse error
messages carry the line and column of the failure.  Non-string map keys are
stringified by ``json``, so documents with such keys do not round-trip.
"""

from __future__ import annotations

import json
from typing import Any

from docsync.codecs.base import ensure_acyclic
from docsync.config import SyncConfig
from docsync.errors import ParseError, SerializationError


class JsonCodec:
    """``json``-backed codec; satisfies the ``Codec`` Protocol structurally."""

    def __init__(self, config: SyncConfig | None = None) -> None:
        self._config = config if config is not None else SyncConfig()

    def parse(self, text: str) -> Any:
        """Parse JSON ``text``; empty text yields ``None``.

        Raises:
            ParseError: On malformed JSON, with ``(line N, col M)`` appended.
        """
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            msg = f"{exc.msg} (line {exc.lineno}, col {exc.colno})"
            raise ParseError(msg) from exc

    def dump(self, tree: Any) -> str:
        """Serialize ``tree`` as indented JSON followed by a newline.

        Raises:
            SerializationError: If ``tree`` is cyclic or not JSON-encodable.
        """
        ensure_acyclic(tree)
        try:
            return json.dumps(tree, indent=self._config.indent, ensure_ascii=False) + "\n"
        except (TypeError, ValueError) as exc:
            raise SerializationError(str(exc)) from exc
