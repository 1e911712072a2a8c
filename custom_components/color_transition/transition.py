"""ColorTransition engine for the Color Transition integration."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum
from typing import Any

from homeassistant.core import CALLBACK_TYPE, HomeAssistant, callback
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers.event import async_call_later, async_track_time_interval

from .color import CHANNELS, Color
from .const import DEFAULT_AMOUNT, DEFAULT_DELAY_MS, DEFAULT_INTERVAL_MS

_LOGGER = logging.getLogger(__name__)

StepCallback = Callable[[Color], None]
FinishedCallback = Callable[["ColorTransition"], None]


# =============================================================================
# Errors
# =============================================================================


class TransitionError(HomeAssistantError):
    """Base error for color transitions."""


class InvalidTransitionError(TransitionError):
    """Raised when a transition is configured with values it cannot run with."""


class TransitionAlreadyStartedError(TransitionError):
    """Raised when start() is called on a transition that has already started."""


# =============================================================================
# Modes
# =============================================================================


@dataclass(frozen=True)
class TwoPointMode:
    """Interpolate from one color to another in steps of a fixed amount."""

    start: Color
    end: Color


@dataclass(frozen=True)
class SequenceMode:
    """Jump through an ordered list of waypoint colors, one per tick."""

    waypoints: tuple[Color, ...] = field(default_factory=tuple)


TransitionMode = TwoPointMode | SequenceMode


class TransitionState(StrEnum):
    """Lifecycle of a ColorTransition."""

    CONSTRUCTED = "constructed"
    DELAYING = "delaying"
    TICKING = "ticking"
    STOPPED = "stopped"


# =============================================================================
# Steppers
# =============================================================================


def _step_channel(value: float, target: float, original: float, amount: float) -> float:
    """Move one channel toward its target by amount, clamping at the target.

    Direction is taken from original -> target, not current -> target, so the
    sign of movement never changes during a transition.
    """
    if target < original:
        return max(value - amount, target)
    return min(value + amount, target)


class _TwoPointStepper:
    """Per-tick rules for a two-point transition."""

    def __init__(self, mode: TwoPointMode, amount: float) -> None:
        self.original: Color | None = mode.start
        self.target: Color | None = mode.end
        self.amount = amount
        self.index: int | None = None

    def next_color(self, current: Color) -> Color:
        return Color(
            *(
                _step_channel(
                    current.channel(name),
                    self.target.channel(name),
                    self.original.channel(name),
                    self.amount,
                )
                for name in CHANNELS
            )
        )

    def advance(self) -> None:
        """Nothing to advance; the target is fixed."""

    def finished(self, current: Color | None) -> bool:
        return current == self.target

    def step_count(self) -> int:
        return max(
            math.ceil(abs(self.target.channel(name) - self.original.channel(name)) / self.amount)
            for name in CHANNELS
        )


class _SequenceStepper:
    """Per-tick rules for a waypoint sequence.

    index points at the waypoint current_color was last set to. The target is
    always the waypoint after it, and stays on the last waypoint once reached.
    """

    def __init__(self, mode: SequenceMode) -> None:
        self.waypoints = mode.waypoints
        self.index: int | None = 0
        self.original: Color | None = self.waypoints[0] if self.waypoints else None
        self.target: Color | None = self._waypoint_after(0)

    def _waypoint_after(self, index: int) -> Color | None:
        if not self.waypoints:
            return None
        return self.waypoints[min(index + 1, len(self.waypoints) - 1)]

    def next_color(self, current: Color) -> Color:
        # Jumps straight to the next waypoint; amount does not apply here
        return Color(*(self.target.channel(name) for name in CHANNELS))

    def advance(self) -> None:
        self.index = min(self.index + 1, len(self.waypoints) - 1)
        self.target = self._waypoint_after(self.index)

    def finished(self, current: Color | None) -> bool:
        return self.index >= len(self.waypoints) - 1

    def step_count(self) -> int:
        return max(len(self.waypoints) - 1, 0)


# =============================================================================
# Engine
# =============================================================================


class ColorTransition:  # pylint: disable=too-many-instance-attributes
    """Step a color toward a target on Home Assistant's event loop.

    Configuration and mode are fixed at construction. Nothing happens until
    start() is called; after delay_ms the engine ticks every interval_ms,
    reports each new color to step_callback and stops itself once the target
    is reached. A stopped transition cannot be restarted.

    Usage:
        transition = ColorTransition(
            hass,
            TwoPointMode(Color(255, 255, 255), Color(0, 0, 0)),
            interval_ms=10,
            step_callback=lambda color: print(color.as_tuple()),
        )
        transition.start()
    """

    def __init__(
        self,
        hass: HomeAssistant,
        mode: TransitionMode,
        interval_ms: float = DEFAULT_INTERVAL_MS,
        delay_ms: float = DEFAULT_DELAY_MS,
        amount: float = DEFAULT_AMOUNT,
        step_callback: StepCallback | None = None,
        *,
        on_finished: FinishedCallback | None = None,
        name: str | None = None,
    ) -> None:
        """Initialise the transition.

        Args:
            hass: Home Assistant instance whose event loop drives the ticks
            mode: TwoPointMode or SequenceMode
            interval_ms: Time between ticks in milliseconds (> 0)
            delay_ms: Time before ticking starts in milliseconds (>= 0)
            amount: Per-tick change of each channel (> 0, two-point only)
            step_callback: Called with the new color on every tick
            on_finished: Called once with this transition when it stops
            name: Label used in logs and timer names

        Raises:
            InvalidTransitionError: If interval, delay or amount cannot work.
        """
        if interval_ms <= 0:
            raise InvalidTransitionError(f"interval_ms must be positive, got {interval_ms}")
        if delay_ms < 0:
            raise InvalidTransitionError(f"delay_ms must not be negative, got {delay_ms}")
        if isinstance(mode, TwoPointMode) and amount <= 0:
            raise InvalidTransitionError(f"amount must be positive, got {amount}")

        self.hass = hass
        self.mode = mode
        self.interval_ms = interval_ms
        self.delay_ms = delay_ms
        self.amount = amount
        self.name = name or "color_transition"

        self._step_callback: StepCallback = step_callback or (lambda _color: None)
        self._on_finished = on_finished

        self._stepper: _TwoPointStepper | _SequenceStepper
        if isinstance(mode, SequenceMode):
            self._stepper = _SequenceStepper(mode)
        else:
            self._stepper = _TwoPointStepper(mode, amount)

        self.current_color: Color | None = self._stepper.original
        self.completed = False
        self.steps_taken = 0
        self._state = TransitionState.CONSTRUCTED

        self._cancel_delay: CALLBACK_TYPE | None = None
        self._cancel_interval: CALLBACK_TYPE | None = None

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def state(self) -> TransitionState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_running(self) -> bool:
        """Whether the transition is delaying or ticking."""
        return self._state in (TransitionState.DELAYING, TransitionState.TICKING)

    @property
    def is_stopped(self) -> bool:
        """Whether the transition has reached its terminal state."""
        return self._state is TransitionState.STOPPED

    @property
    def original_color(self) -> Color | None:
        """Color the transition started from."""
        return self._stepper.original

    @property
    def target_color(self) -> Color | None:
        """Color the next tick moves toward."""
        return self._stepper.target

    @property
    def waypoint_index(self) -> int | None:
        """Index of the waypoint last applied, or None in two-point mode."""
        return self._stepper.index

    def step_count(self) -> int:
        """Number of ticks a full run of this transition takes."""
        return self._stepper.step_count()

    def duration_ms(self) -> float:
        """Expected time from start() to the final tick, in milliseconds."""
        steps = self.step_count()
        if steps == 0:
            return 0
        return self.delay_ms + steps * self.interval_ms

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly snapshot of the transition."""
        return {
            "name": self.name,
            "mode": "sequence" if isinstance(self.mode, SequenceMode) else "two_point",
            "state": str(self._state),
            "completed": self.completed,
            "interval_ms": self.interval_ms,
            "delay_ms": self.delay_ms,
            "amount": self.amount,
            "steps_taken": self.steps_taken,
            "step_count": self.step_count(),
            "waypoint_index": self.waypoint_index,
            "original_color": self.original_color.as_dict() if self.original_color else None,
            "current_color": self.current_color.as_dict() if self.current_color else None,
            "target_color": self.target_color.as_dict() if self.target_color else None,
        }

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @callback
    def start(self) -> None:
        """Schedule the transition to begin ticking after delay_ms.

        Raises:
            TransitionAlreadyStartedError: If start() was already called.
        """
        if self._state is not TransitionState.CONSTRUCTED:
            raise TransitionAlreadyStartedError(f"{self.name} has already been started")

        if self._stepper.finished(self.current_color):
            _LOGGER.debug("%s: Already at target, nothing to do", self.name)
            self._finish(completed=True)
            return

        _LOGGER.debug(
            "%s: Starting in %sms, %d steps every %sms",
            self.name,
            self.delay_ms,
            self.step_count(),
            self.interval_ms,
        )
        self._state = TransitionState.DELAYING
        self._cancel_delay = async_call_later(
            self.hass, self.delay_ms / 1000, self._async_begin_ticking
        )

    @callback
    def stop(self) -> None:
        """Cancel any pending timers and stop the transition for good.

        A no-op before start() and after the transition has stopped.
        """
        if self._state in (TransitionState.CONSTRUCTED, TransitionState.STOPPED):
            return
        self._finish(completed=False)

    @callback
    def _async_begin_ticking(self, _now: datetime) -> None:
        """Register the recurring tick once the start delay has elapsed."""
        self._cancel_delay = None
        if self._state is not TransitionState.DELAYING:
            return
        self._state = TransitionState.TICKING
        self._cancel_interval = async_track_time_interval(
            self.hass,
            self._async_tick,
            timedelta(milliseconds=self.interval_ms),
            name=self.name,
            cancel_on_shutdown=True,
        )

    @callback
    def _async_tick(self, _now: datetime) -> None:
        """Advance the color one step and report it."""
        if self._state is not TransitionState.TICKING:
            return

        self.current_color = self._stepper.next_color(self.current_color)
        self.steps_taken += 1
        _LOGGER.debug(
            "%s: Step %d/%d -> %s",
            self.name,
            self.steps_taken,
            self.step_count(),
            self.current_color,
        )
        self._step_callback(self.current_color)
        if self._state is not TransitionState.TICKING:
            # Stopped from inside the callback
            return

        self._stepper.advance()
        if self._stepper.finished(self.current_color):
            self._finish(completed=True)

    @callback
    def _finish(self, completed: bool) -> None:
        """Cancel both timers and move to the terminal state."""
        if self._cancel_delay is not None:
            self._cancel_delay()
            self._cancel_delay = None
        if self._cancel_interval is not None:
            self._cancel_interval()
            self._cancel_interval = None

        if self._state is TransitionState.STOPPED:
            return
        self._state = TransitionState.STOPPED
        self.completed = completed
        _LOGGER.debug(
            "%s: Stopped after %d steps (completed=%s)", self.name, self.steps_taken, completed
        )

        if self._on_finished is not None:
            self._on_finished(self)
