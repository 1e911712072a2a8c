"""TransitionParams model for the Color Transition integration."""

from __future__ import annotations

from dataclasses import dataclass

from .color import Color
from .const import (
    ATTR_AMOUNT,
    ATTR_COLORS,
    ATTR_DELAY_MS,
    ATTR_FROM,
    ATTR_INTERVAL_MS,
    ATTR_TO,
    ATTR_TRANSITION_ID,
)
from .transition import SequenceMode, TransitionMode, TwoPointMode


@dataclass
class TransitionParams:
    """Normalized parameters for a start_transition service call.

    Either from_color and to_color are set (two-point) or colors is set
    (sequence). Timing values left as None fall back to the integration's
    configured defaults.

    Type/range validation and the from/to vs colors exclusion are handled by
    the voluptuous schema in __init__.py. This class only extracts values.
    """

    transition_id: str
    from_color: Color | None = None
    to_color: Color | None = None
    colors: tuple[Color, ...] | None = None
    interval_ms: float | None = None
    delay_ms: float | None = None
    amount: float | None = None

    @property
    def is_sequence(self) -> bool:
        """Whether the call asked for a waypoint sequence."""
        return self.colors is not None

    def build_mode(self) -> TransitionMode:
        """Return the transition mode described by these parameters."""
        if self.colors is not None:
            return SequenceMode(self.colors)
        if self.from_color is None or self.to_color is None:
            raise ValueError("Two-point transitions need both a from and a to color")
        return TwoPointMode(self.from_color, self.to_color)

    @classmethod
    def from_service_data(cls, data: dict) -> TransitionParams:
        """Create TransitionParams from validated service call data."""
        from_color = Color.from_value(data[ATTR_FROM]) if ATTR_FROM in data else None
        to_color = Color.from_value(data[ATTR_TO]) if ATTR_TO in data else None
        colors = (
            tuple(Color.from_value(color) for color in data[ATTR_COLORS])
            if ATTR_COLORS in data
            else None
        )

        return cls(
            transition_id=str(data[ATTR_TRANSITION_ID]),
            from_color=from_color,
            to_color=to_color,
            colors=colors,
            interval_ms=data.get(ATTR_INTERVAL_MS),
            delay_ms=data.get(ATTR_DELAY_MS),
            amount=data.get(ATTR_AMOUNT),
        )
