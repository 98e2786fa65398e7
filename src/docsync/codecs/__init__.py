"""Codecs subpackage for docsync.

``YamlCodec`` (PyYAML) is the default serialization used by
``DocumentStateManager``; ``JsonCodec`` is available for strict JSON text.
Both satisfy the ``Codec`` Protocol structurally.
"""

from docsync.codecs.base import ensure_acyclic
from docsync.codecs.json_codec import JsonCodec
from docsync.codecs.yaml_codec import YamlCodec

__all__ = ["JsonCodec", "YamlCodec", "ensure_acyclic"]
