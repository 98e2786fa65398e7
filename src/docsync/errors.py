"""Exception hierarchy for docsync.

Codec and path errors are raised by the low-level helpers and caught by
``DocumentStateManager``, which reports them through the ``error`` field of
the next ChangeNotification instead of propagating them to callers.
"""

from __future__ import annotations

__all__ = [
    "CodecError",
    "DocSyncError",
    "ParseError",
    "PathError",
    "PathResolutionError",
    "PathSyntaxError",
    "SerializationError",
    "TemplateError",
]


class DocSyncError(Exception):
    """Base class for every error raised by docsync."""


class CodecError(DocSyncError):
    """A conversion between text and tree failed."""


class ParseError(CodecError):
    """Text could not be converted into a Document."""


class SerializationError(CodecError):
    """A Document could not be converted into text (cycles, foreign types)."""


class PathError(DocSyncError):
    """A path string could not be used against a Document."""


class PathSyntaxError(PathError):
    """A path string is malformed (unbalanced bracket, non-integer index)."""


class PathResolutionError(PathError):
    """A write addresses a location whose shape cannot hold it."""


class TemplateError(DocSyncError):
    """A template is empty or references placeholders the Document lacks."""
