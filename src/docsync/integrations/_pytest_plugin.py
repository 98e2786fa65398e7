"""pytest plugin for docsync.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest

from docsync import DocumentStateManager, SyncConfig, TickScheduler, YamlCodec


@pytest.fixture
def document_manager() -> Iterator[Callable[..., DocumentStateManager]]:
    """Factory fixture creating managers driven by a ``TickScheduler``.

    Every manager created through the factory is destroyed at teardown.

    Usage in tests::

        def test_edit(document_manager):
            manager = document_manager("a: 1\\n")
            manager.update_path("a", 2)
            manager.scheduler.run_pending()
            assert manager.get_tree() == {"a": 2}

    Returns:
        A callable ``_make(initial_text="", config=None, codec=None)``.
    """
    created: list[DocumentStateManager] = []

    def _make(
        initial_text: str = "",
        config: SyncConfig | None = None,
        codec: Any = None,
    ) -> DocumentStateManager:
        manager = DocumentStateManager(
            initial_text, codec=codec, config=config, scheduler=TickScheduler()
        )
        created.append(manager)
        return manager

    yield _make

    for manager in created:
        manager.destroy()


@pytest.fixture(scope="session")
def assert_round_trips() -> Any:
    """Fixture that returns a callable codec round-trip asserter.

    The fixture is session-scoped because the returned callable is stateless
    (it builds a fresh ``YamlCodec`` per call unless one is given).

    Usage in tests::

        def test_shape(assert_round_trips):
            assert_round_trips({"items": [{"a": 1}, {"a": 2}]})

    Returns:
        A callable ``_assert(tree, codec=None) -> str`` returning the
        serialized text, raising ``AssertionError`` when
        ``parse(dump(tree)) != tree`` or when reserializing changes the text.
    """

    def _assert(tree: Any, codec: Any = None) -> str:
        codec = codec if codec is not None else YamlCodec()
        text = codec.dump(tree)
        parsed = codec.parse(text)
        if parsed != tree:
            raise AssertionError(
                f"Document does not round-trip:\n"
                f"  original: {tree!r}\n"
                f"  text:     {text!r}\n"
                f"  parsed:   {parsed!r}"
            )
        again = codec.dump(parsed)
        if again != text:
            raise AssertionError(
                f"Reserialization is not stable:\n"
                f"  first:  {text!r}\n"
                f"  second: {again!r}"
            )
        return text

    return _assert
