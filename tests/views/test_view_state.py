"""Tests for ViewStateMachine."""

from __future__ import annotations

from docsync.views.base import ViewState, ViewStateMachine


class TestViewStateMachine:
    def test_starts_idle(self) -> None:
        machine = ViewStateMachine()
        assert machine.state == ViewState.IDLE
        assert machine.accepts_input

    def test_editing_context(self) -> None:
        machine = ViewStateMachine()
        with machine.editing():
            assert machine.state == ViewState.EDITING
        assert machine.state == ViewState.IDLE

    def test_explicit_transitions(self) -> None:
        machine = ViewStateMachine()
        machine.begin_editing()
        with machine.editing():
            pass
        assert machine.state == ViewState.EDITING
        machine.end_editing()
        assert machine.state == ViewState.IDLE

    def test_suspension_nests(self) -> None:
        machine = ViewStateMachine()
        with machine.suspended():
            with machine.suspended():
                assert machine.is_suspended
            assert machine.is_suspended
            assert not machine.accepts_input
        assert not machine.is_suspended

    def test_suspension_released_on_error(self) -> None:
        machine = ViewStateMachine()
        try:
            with machine.suspended():
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert not machine.is_suspended
