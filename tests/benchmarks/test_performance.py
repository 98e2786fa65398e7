"""Performance benchmark suite for docsync.

Measures the operations that run on every keystroke or button press:
- parse / serialize of the whole document
- one form edit (write + reserialize + incremental form render)
- one structural action (write + reserialize + full form rebuild)

Run with: pytest tests/benchmarks/ --benchmark-only -v
Skip during normal test runs: pytest --benchmark-disable
"""

from __future__ import annotations

from docsync import DocumentStateManager, StructuredFormView, dump_tree, parse_text
from docsync.views.form import RenderMode


class TestCodec:
    """Whole-document conversions."""

    def test_dump_10key(self, benchmark, doc_10key):  # type: ignore[no-untyped-def]
        text = benchmark(dump_tree, doc_10key)
        assert text.count("\n") == 10

    def test_dump_100key(self, benchmark, doc_100key):  # type: ignore[no-untyped-def]
        text = benchmark(dump_tree, doc_100key)
        assert parse_text(text) == doc_100key

    def test_parse_500key(self, benchmark, doc_500key, text_500key):  # type: ignore[no-untyped-def]
        tree = benchmark(parse_text, text_500key)
        assert tree == doc_500key


class TestFormEdits:
    """Round trips through the manager with a rendered form attached."""

    def test_scalar_edit_500key(self, benchmark, text_500key):  # type: ignore[no-untyped-def]
        manager = DocumentStateManager(text_500key)
        form = StructuredFormView(manager)
        counter = iter(range(10**9))

        def edit() -> None:
            manager.update_path("records[25].name", f"n{next(counter)}", immediate=True)

        benchmark(edit)
        assert form.last_render_mode == RenderMode.INCREMENTAL
        assert manager.is_valid_state()

    def test_bulk_property_500key(self, benchmark, text_500key):  # type: ignore[no-untyped-def]
        manager = DocumentStateManager(text_500key)
        form = StructuredFormView(manager)
        keys = (f"extra_{i}" for i in range(10**9))

        def add() -> None:
            form.add_property(next(keys), path="records")

        benchmark(add)
        assert form.last_render_mode == RenderMode.FULL
        assert all("extra_0" in record for record in manager.get_tree()["records"])
