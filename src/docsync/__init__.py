"""docsync - keeps a serialized document and its structured editors in sync."""

from __future__ import annotations

import logging

from docsync.api import dump_tree, open_editor, parse_text, render_template
from docsync.codecs import JsonCodec, YamlCodec
from docsync.config import Origin, SyncConfig
from docsync.editor import SyncedEditor
from docsync.errors import (
    CodecError,
    DocSyncError,
    ParseError,
    PathError,
    PathResolutionError,
    PathSyntaxError,
    SerializationError,
    TemplateError,
)
from docsync.manager import DocumentStateManager, Subscription
from docsync.result import ChangeNotification
from docsync.scheduling import AsyncioScheduler, TickScheduler
from docsync.template import TemplateRenderer, flatten_document
from docsync.tree import MISSING, assign, coerce_to_array, parse_path, resolve
from docsync.views import StructuredFormView, TextSurfaceView, YamlHighlighter

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "MISSING",
    "AsyncioScheduler",
    "ChangeNotification",
    "CodecError",
    "DocSyncError",
    "DocumentStateManager",
    "JsonCodec",
    "Origin",
    "ParseError",
    "PathError",
    "PathResolutionError",
    "PathSyntaxError",
    "SerializationError",
    "StructuredFormView",
    "Subscription",
    "SyncConfig",
    "SyncedEditor",
    "TemplateError",
    "TemplateRenderer",
    "TextSurfaceView",
    "TickScheduler",
    "YamlCodec",
    "YamlHighlighter",
    "assign",
    "coerce_to_array",
    "dump_tree",
    "flatten_document",
    "open_editor",
    "parse_path",
    "parse_text",
    "render_template",
    "resolve",
]
