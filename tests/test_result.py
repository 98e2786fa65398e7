"""Tests for the ChangeNotification dataclass."""

from __future__ import annotations

import dataclasses

import pytest

from docsync.config import Origin
from docsync.result import ChangeNotification


def _notification(origin: Origin | None) -> ChangeNotification:
    return ChangeNotification(tree={"a": 1}, text="a: 1\n", is_valid=True, error=None, origin=origin)


class TestChangeNotification:
    """Construction, immutability and origin checks."""

    def test_fields(self) -> None:
        note = _notification(Origin.TEXT)
        assert note.tree == {"a": 1}
        assert note.text == "a: 1\n"
        assert note.is_valid
        assert note.error is None
        assert note.origin == Origin.TEXT

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            _notification(None).text = "x"  # type: ignore[misc]

    def test_is_from(self) -> None:
        assert _notification(Origin.FORM).is_from(Origin.FORM)
        assert not _notification(Origin.FORM).is_from(Origin.TEXT)

    def test_no_origin_is_from_nobody(self) -> None:
        note = _notification(None)
        assert not note.is_from(Origin.FORM)
        assert not note.is_from(Origin.TEXT)
