"""Tests for SyncConfig validation and the Origin StrEnum."""

from __future__ import annotations

import dataclasses

import pytest

from docsync.config import Origin, SyncConfig


class TestSyncConfigDefaults:
    """Default values."""

    def test_defaults(self) -> None:
        config = SyncConfig()
        assert config.debounce_delay == 0.0
        assert config.indent == 2
        assert config.line_width == -1
        assert config.no_refs is True
        assert config.indent_unit == 2
        assert config.path_cache_size == 1024

    def test_default_width_is_unlimited(self) -> None:
        assert SyncConfig().unlimited_width

    def test_positive_width_is_limited(self) -> None:
        assert not SyncConfig(line_width=80).unlimited_width

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            SyncConfig().indent = 4  # type: ignore[misc]


class TestSyncConfigValidation:
    """Invalid values are rejected at construction."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"debounce_delay": -0.1},
            {"indent": 0},
            {"indent": 10},
            {"line_width": 0},
            {"line_width": 19},
            {"indent_unit": 0},
            {"path_cache_size": 0},
        ],
    )
    def test_rejects(self, kwargs: dict[str, float]) -> None:
        with pytest.raises(ValueError):
            SyncConfig(**kwargs)  # type: ignore[arg-type]

    @pytest.mark.parametrize("width", [-1, -100, 20, 120])
    def test_accepts_widths(self, width: int) -> None:
        assert SyncConfig(line_width=width).line_width == width


class TestOrigin:
    """Tests for the Origin StrEnum."""

    def test_values(self) -> None:
        assert Origin.FORM == "form"
        assert Origin.TEXT == "text"

    def test_has_two_members(self) -> None:
        assert len(Origin) == 2
