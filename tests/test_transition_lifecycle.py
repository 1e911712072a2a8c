"""Tests for ColorTransition start/stop lifecycle, timing and guards."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest
from homeassistant.core import HomeAssistant

from custom_components.color_transition.color import Color
from custom_components.color_transition.transition import (
    ColorTransition,
    InvalidTransitionError,
    SequenceMode,
    TransitionAlreadyStartedError,
    TransitionError,
    TransitionState,
    TwoPointMode,
)

BLACK_TO_WHITE = TwoPointMode(Color(0, 0, 0), Color(255, 255, 255))


class TestDelay:
    """Test the start delay and the first tick."""

    async def test_no_tick_before_delay_and_first_tick_after_interval(
        self, hass: HomeAssistant, advance: Callable[[float], None]
    ) -> None:
        """Test delay=100, interval=10 (in seconds here) first ticks at about 110.

        Nothing fires before the delay; the delay itself does not tick; the first
        tick comes one interval after the delay.
        """
        step = MagicMock()
        transition = ColorTransition(
            hass, BLACK_TO_WHITE, interval_ms=10_000, delay_ms=100_000, step_callback=step
        )
        transition.start()
        assert transition.state is TransitionState.DELAYING

        advance(99_000)
        await hass.async_block_till_done()
        assert transition.state is TransitionState.DELAYING
        step.assert_not_called()

        advance(100_000)
        await hass.async_block_till_done()
        assert transition.state is TransitionState.TICKING
        step.assert_not_called()

        advance(5_000)
        await hass.async_block_till_done()
        step.assert_not_called()

        advance(10_000)
        await hass.async_block_till_done()
        step.assert_called_once_with(Color(1, 1, 1))

        transition.stop()

    async def test_stop_during_delay_cancels_start(
        self, hass: HomeAssistant, advance: Callable[[float], None]
    ) -> None:
        """Test stopping while delaying means ticking never begins."""
        step = MagicMock()
        transition = ColorTransition(
            hass, BLACK_TO_WHITE, interval_ms=1_000, delay_ms=5_000, step_callback=step
        )
        transition.start()
        transition.stop()

        advance(5_000)
        advance(1_000)
        advance(1_000)
        await hass.async_block_till_done()

        step.assert_not_called()
        assert transition.state is TransitionState.STOPPED
        assert transition.completed is False
        assert transition.current_color == Color(0, 0, 0)


class TestStop:
    """Test external and repeated stop calls."""

    async def test_stop_mid_transition_freezes_color(
        self, hass: HomeAssistant, advance: Callable[[float], None]
    ) -> None:
        """Test no callbacks fire after stop and the last color is kept."""
        step = MagicMock()
        transition = ColorTransition(hass, BLACK_TO_WHITE, interval_ms=1_000, step_callback=step)
        transition.start()
        advance(0)
        for _ in range(3):
            advance(1_000)
        assert step.call_count == 3

        transition.stop()
        for _ in range(3):
            advance(1_000)
        await hass.async_block_till_done()

        assert step.call_count == 3
        assert transition.current_color == Color(3, 3, 3)
        assert transition.is_stopped
        assert transition.completed is False

    async def test_stop_is_idempotent_after_completion(
        self, hass: HomeAssistant, advance: Callable[[float], None]
    ) -> None:
        """Test repeated stop after completion changes nothing."""
        step = MagicMock()
        finished = MagicMock()
        transition = ColorTransition(
            hass,
            TwoPointMode(Color(0, 0, 0), Color(1, 1, 1)),
            interval_ms=1_000,
            step_callback=step,
            on_finished=finished,
        )
        transition.start()
        advance(0)
        advance(1_000)
        assert transition.completed is True

        transition.stop()
        transition.stop()
        advance(1_000)

        assert step.call_count == 1
        finished.assert_called_once_with(transition)
        assert transition.completed is True
        assert transition.current_color == Color(1, 1, 1)

    async def test_stop_before_start_is_noop(
        self, hass: HomeAssistant, advance: Callable[[float], None]
    ) -> None:
        """Test stop before start leaves the transition startable."""
        step = MagicMock()
        transition = ColorTransition(
            hass, TwoPointMode(Color(0, 0, 0), Color(1, 0, 0)), step_callback=step
        )

        transition.stop()
        assert transition.state is TransitionState.CONSTRUCTED

        transition.start()
        advance(0)
        advance(1)
        step.assert_called_once_with(Color(1, 0, 0))
        assert transition.is_stopped

    async def test_callback_can_stop_transition(
        self, hass: HomeAssistant, advance: Callable[[float], None]
    ) -> None:
        """Test stopping from inside the step callback halts further ticks."""
        seen: list[Color] = []

        def _step(color: Color) -> None:
            seen.append(color)
            transition.stop()

        transition = ColorTransition(
            hass,
            SequenceMode((Color(0, 0, 0), Color(1, 1, 1), Color(2, 2, 2))),
            interval_ms=1_000,
            step_callback=_step,
        )
        transition.start()
        advance(0)
        advance(1_000)
        advance(1_000)

        assert seen == [Color(1, 1, 1)]
        assert transition.completed is False
        assert transition.waypoint_index == 0


class TestStart:
    """Test start() guards and trivial transitions."""

    async def test_start_twice_raises(self, hass: HomeAssistant) -> None:
        """Test a second start fails fast instead of double scheduling."""
        transition = ColorTransition(hass, BLACK_TO_WHITE, delay_ms=1_000)
        transition.start()

        with pytest.raises(TransitionAlreadyStartedError):
            transition.start()

        transition.stop()

    async def test_start_after_stop_raises(self, hass: HomeAssistant) -> None:
        """Test a stopped transition cannot be restarted."""
        transition = ColorTransition(hass, BLACK_TO_WHITE, delay_ms=1_000)
        transition.start()
        transition.stop()

        with pytest.raises(TransitionAlreadyStartedError):
            transition.start()

    async def test_equal_endpoints_stop_immediately(self, hass: HomeAssistant) -> None:
        """Test start == end needs zero ticks and never calls back."""
        step = MagicMock()
        finished = MagicMock()
        transition = ColorTransition(
            hass,
            TwoPointMode(Color(9, 9, 9), Color(9, 9, 9)),
            step_callback=step,
            on_finished=finished,
        )

        transition.start()

        assert transition.state is TransitionState.STOPPED
        assert transition.completed is True
        assert transition.step_count() == 0
        step.assert_not_called()
        finished.assert_called_once_with(transition)

    @pytest.mark.parametrize("waypoints", [(), (Color(1, 2, 3),)])
    async def test_short_sequence_is_already_complete(
        self, hass: HomeAssistant, waypoints: tuple[Color, ...]
    ) -> None:
        """Test empty and single-waypoint sequences finish without ticking."""
        step = MagicMock()
        transition = ColorTransition(hass, SequenceMode(waypoints), step_callback=step)

        transition.start()

        assert transition.is_stopped
        assert transition.completed is True
        assert transition.step_count() == 0
        step.assert_not_called()

    async def test_empty_sequence_has_no_colors(self, hass: HomeAssistant) -> None:
        """Test an empty sequence reports no colors instead of indexing out of range."""
        transition = ColorTransition(hass, SequenceMode(()))

        assert transition.current_color is None
        assert transition.original_color is None
        assert transition.target_color is None


class TestGuards:
    """Test constructor guards against settings that cannot run."""

    @pytest.mark.parametrize("amount", [0, -1, -0.5])
    async def test_non_positive_amount_rejected(self, hass: HomeAssistant, amount: float) -> None:
        """Test two-point transitions need a positive amount."""
        with pytest.raises(InvalidTransitionError):
            ColorTransition(hass, BLACK_TO_WHITE, amount=amount)

    async def test_amount_unused_in_sequence_mode(self, hass: HomeAssistant) -> None:
        """Test sequence mode does not check amount."""
        transition = ColorTransition(
            hass, SequenceMode((Color(0, 0, 0), Color(1, 1, 1))), amount=0
        )

        assert transition.state is TransitionState.CONSTRUCTED

    @pytest.mark.parametrize("interval_ms", [0, -10])
    async def test_non_positive_interval_rejected(
        self, hass: HomeAssistant, interval_ms: float
    ) -> None:
        """Test the tick interval must be positive."""
        with pytest.raises(InvalidTransitionError):
            ColorTransition(hass, BLACK_TO_WHITE, interval_ms=interval_ms)

    async def test_negative_delay_rejected(self, hass: HomeAssistant) -> None:
        """Test the start delay cannot be negative."""
        with pytest.raises(InvalidTransitionError):
            ColorTransition(hass, BLACK_TO_WHITE, delay_ms=-1)

    def test_errors_share_base_class(self) -> None:
        """Test both guard errors can be caught as TransitionError."""
        assert issubclass(InvalidTransitionError, TransitionError)
        assert issubclass(TransitionAlreadyStartedError, TransitionError)


class TestEstimates:
    """Test step_count, duration_ms and as_dict."""

    async def test_step_count_rounds_up(self, hass: HomeAssistant) -> None:
        """Test a partial final step still counts as a tick."""
        transition = ColorTransition(
            hass, TwoPointMode(Color(0, 0, 0), Color(10, 4, 0)), amount=3
        )

        assert transition.step_count() == 4

    async def test_duration_includes_delay(self, hass: HomeAssistant) -> None:
        """Test duration is delay plus one interval per step."""
        transition = ColorTransition(
            hass,
            TwoPointMode(Color(0, 0, 0), Color(10, 0, 0)),
            interval_ms=50,
            delay_ms=200,
            amount=2,
        )

        assert transition.duration_ms() == 200 + 5 * 50

    async def test_duration_zero_without_steps(self, hass: HomeAssistant) -> None:
        """Test a transition with nothing to do takes no time."""
        transition = ColorTransition(
            hass, TwoPointMode(Color(1, 1, 1), Color(1, 1, 1)), delay_ms=500
        )

        assert transition.duration_ms() == 0

    async def test_as_dict(self, hass: HomeAssistant) -> None:
        """Test the diagnostics snapshot before starting."""
        transition = ColorTransition(
            hass,
            SequenceMode((Color(0, 0, 0), Color(5, 5, 5))),
            interval_ms=20,
            name="demo",
        )

        assert transition.as_dict() == {
            "name": "demo",
            "mode": "sequence",
            "state": "constructed",
            "completed": False,
            "interval_ms": 20,
            "delay_ms": 0,
            "amount": 1,
            "steps_taken": 0,
            "step_count": 1,
            "waypoint_index": 0,
            "original_color": {"r": 0, "g": 0, "b": 0},
            "current_color": {"r": 0, "g": 0, "b": 0},
            "target_color": {"r": 5, "g": 5, "b": 5},
        }
