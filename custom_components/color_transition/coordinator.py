"""TransitionCoordinator for the Color Transition integration."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from homeassistant.core import HomeAssistant, callback

from .color import Color
from .const import (
    ATTR_COMPLETED,
    ATTR_STEP,
    ATTR_STEPS,
    ATTR_TRANSITION_ID,
    DEFAULT_AMOUNT,
    DEFAULT_DELAY_MS,
    DEFAULT_INTERVAL_MS,
    EVENT_TRANSITION_FINISHED,
    EVENT_TRANSITION_STEP,
)
from .transition import ColorTransition
from .transition_params import TransitionParams

_LOGGER = logging.getLogger(__name__)


class TransitionCoordinator:
    """Own the transitions started through the integration's services.

    Transitions are keyed by transition_id. Each tick is published as a
    color_transition_step event, and the end of a transition (natural or
    external) as a color_transition_finished event.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        interval_ms: float = DEFAULT_INTERVAL_MS,
        delay_ms: float = DEFAULT_DELAY_MS,
        amount: float = DEFAULT_AMOUNT,
    ) -> None:
        self.hass = hass
        self.interval_ms = interval_ms
        self.delay_ms = delay_ms
        self.amount = amount
        self._transitions: dict[str, ColorTransition] = {}

    @property
    def active_transitions(self) -> Mapping[str, ColorTransition]:
        """Read-only view of the transitions that have not finished yet."""
        return MappingProxyType(self._transitions)

    @callback
    def async_start_transition(self, params: TransitionParams) -> ColorTransition:
        """Start a transition, replacing any active one with the same id.

        Raises:
            InvalidTransitionError: If the resolved settings cannot run.
        """
        transition_id = params.transition_id

        existing = self._transitions.get(transition_id)
        if existing is not None:
            _LOGGER.debug("Replacing active transition %s", transition_id)
            existing.stop()

        @callback
        def _on_step(color: Color) -> None:
            self.hass.bus.async_fire(
                EVENT_TRANSITION_STEP,
                {
                    ATTR_TRANSITION_ID: transition_id,
                    ATTR_STEP: transition.steps_taken,
                    **color.as_dict(),
                },
            )

        transition = ColorTransition(
            self.hass,
            params.build_mode(),
            interval_ms=self.interval_ms if params.interval_ms is None else params.interval_ms,
            delay_ms=self.delay_ms if params.delay_ms is None else params.delay_ms,
            amount=self.amount if params.amount is None else params.amount,
            step_callback=_on_step,
            on_finished=self._async_transition_finished,
            name=f"color_transition {transition_id}",
        )
        self._transitions[transition_id] = transition
        transition.start()
        return transition

    @callback
    def async_stop_transition(self, transition_id: str) -> bool:
        """Stop an active transition.

        Returns:
            True if a transition was stopped, False if none was active
        """
        transition = self._transitions.get(transition_id)
        if transition is None:
            _LOGGER.debug("No active transition %s to stop", transition_id)
            return False
        transition.stop()
        return True

    @callback
    def async_shutdown(self) -> None:
        """Stop every active transition."""
        for transition in list(self._transitions.values()):
            transition.stop()
        self._transitions.clear()

    @callback
    def _async_transition_finished(self, transition: ColorTransition) -> None:
        """Forget a finished transition and announce it."""
        transition_id = next(
            (tid for tid, active in self._transitions.items() if active is transition),
            None,
        )
        if transition_id is None:
            return
        del self._transitions[transition_id]

        color = transition.current_color.as_dict() if transition.current_color else {}
        self.hass.bus.async_fire(
            EVENT_TRANSITION_FINISHED,
            {
                ATTR_TRANSITION_ID: transition_id,
                ATTR_COMPLETED: transition.completed,
                ATTR_STEPS: transition.steps_taken,
                **color,
            },
        )
