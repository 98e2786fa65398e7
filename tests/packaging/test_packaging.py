"""Packaging correctness verification for docsync.

Tests validate that:
- The top-level import exposes the documented API
- py.typed marker is present in the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import sys
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    """Verify the base install works with only the declared dependencies."""

    def test_import_docsync(self):  # type: ignore[no-untyped-def]
        """Top-level import succeeds."""
        import docsync

        assert hasattr(docsync, "DocumentStateManager")
        assert hasattr(docsync, "SyncedEditor")
        assert hasattr(docsync, "render_template")

    def test_round_trip_basic(self):  # type: ignore[no-untyped-def]
        """parse_text() and dump_tree() work with the default YAML codec."""
        from docsync import dump_tree, parse_text

        assert parse_text(dump_tree({"a": [1]})) == {"a": [1]}


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        # Use poetry build since that's the project's build system
        result = subprocess.run(
            ["poetry", "build", "-f", "wheel"],
            cwd=str(PROJECT_ROOT),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("docsync-*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """py.typed marker must be included in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            assert "docsync/py.typed" in names, f"py.typed not found in wheel. Contents: {names}"

    def test_no_pycache_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """__pycache__ directories must not be in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            pycache_files = [n for n in zf.namelist() if "__pycache__" in n]
            assert not pycache_files, f"__pycache__ found in wheel: {pycache_files}"

    def test_all_source_modules_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """All source modules must be present in the wheel."""
        expected_modules = [
            "docsync/__init__.py",
            "docsync/api.py",
            "docsync/cache.py",
            "docsync/config.py",
            "docsync/editor.py",
            "docsync/errors.py",
            "docsync/logging.py",
            "docsync/manager.py",
            "docsync/protocols.py",
            "docsync/result.py",
            "docsync/scheduling.py",
            "docsync/template.py",
            "docsync/codecs/__init__.py",
            "docsync/codecs/base.py",
            "docsync/codecs/json_codec.py",
            "docsync/codecs/yaml_codec.py",
            "docsync/tree/__init__.py",
            "docsync/tree/builder.py",
            "docsync/tree/nodes.py",
            "docsync/tree/normalizer.py",
            "docsync/tree/paths.py",
            "docsync/views/__init__.py",
            "docsync/views/base.py",
            "docsync/views/form.py",
            "docsync/views/highlight.py",
            "docsync/views/text.py",
            "docsync/integrations/__init__.py",
            "docsync/integrations/_pytest_plugin.py",
        ]
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            for module in expected_modules:
                assert module in names, f"Module {module} not found in wheel"

    def test_metadata_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """Wheel metadata must include correct package info."""
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if n.endswith("METADATA")]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "Name: docsync" in metadata
            assert "0.1.0" in metadata
            assert "pyyaml" in metadata.lower()


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self):  # type: ignore[no-untyped-def]
        """pytest11 entry point must be registered for docsync."""
        from importlib.metadata import entry_points

        pytest11_eps = entry_points(group="pytest11")

        ours = [ep for ep in pytest11_eps if "docsync" in str(ep.value)]
        assert ours, (
            f"No pytest11 entry point found for docsync. "
            f"Available: {[ep.name for ep in pytest11_eps]}"
        )

    def test_fixtures_available(self):  # type: ignore[no-untyped-def]
        """Both fixtures must be importable from the plugin module."""
        import importlib

        mod = importlib.import_module("docsync.integrations._pytest_plugin")
        assert callable(mod.document_manager)
        assert callable(mod.assert_round_trips)

    def test_plugin_discovery_via_pytest(self):  # type: ignore[no-untyped-def]
        """pytest --fixtures should list document_manager."""
        result = subprocess.run(
            [sys.executable, "-m", "pytest", "--fixtures", "-q"],
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
        )
        assert "document_manager" in result.stdout, (
            f"Fixture not found in pytest fixtures list. stdout: {result.stdout[:500]}"
        )


class TestPackageMetadata:
    """Verify version and exports."""

    def test_version(self):  # type: ignore[no-untyped-def]
        """Package version must be 0.1.0."""
        import docsync

        assert docsync.__version__ == "0.1.0"

    def test_core_exports(self):  # type: ignore[no-untyped-def]
        """__all__ must include the documented public API."""
        import docsync

        expected = {
            "ChangeNotification",
            "DocumentStateManager",
            "Origin",
            "StructuredFormView",
            "SyncConfig",
            "SyncedEditor",
            "TextSurfaceView",
            "TemplateRenderer",
            "YamlCodec",
            "dump_tree",
            "open_editor",
            "parse_text",
            "render_template",
        }
        missing = expected - set(docsync.__all__)
        assert not missing, f"Missing: {missing}"
