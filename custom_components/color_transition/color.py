"""Color value model for the Color Transition integration."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

CHANNELS = ("r", "g", "b")


@dataclass(frozen=True)
class Color:
    """A color made of three independent numeric channels.

    The channels are named r, g and b by convention only. No range is
    enforced here; the caller decides what the channel domain is.
    """

    r: float
    g: float
    b: float

    @classmethod
    def from_value(cls, value: Any) -> Color:
        """Build a Color from a Color, an {r, g, b} mapping or a 3-item sequence.

        Raises:
            ValueError: If the value has no recognisable channel layout.
        """
        if isinstance(value, Color):
            return value
        if isinstance(value, Mapping):
            missing = [name for name in CHANNELS if name not in value]
            if missing:
                raise ValueError(f"Color mapping is missing channels: {', '.join(missing)}")
            return cls(*(value[name] for name in CHANNELS))
        if isinstance(value, Sequence) and not isinstance(value, str):
            if len(value) != len(CHANNELS):
                raise ValueError(f"Color needs {len(CHANNELS)} channels, got {len(value)}")
            return cls(*value)
        raise ValueError(f"Cannot build a Color from {value!r}")

    def channel(self, name: str) -> float:
        """Return the value of a single channel by name."""
        if name not in CHANNELS:
            raise KeyError(name)
        return getattr(self, name)

    def as_tuple(self) -> tuple[float, float, float]:
        """Return the channels as an (r, g, b) tuple."""
        return (self.r, self.g, self.b)

    def as_dict(self) -> dict[str, float]:
        """Return the channels as an {r, g, b} dict."""
        return {name: getattr(self, name) for name in CHANNELS}
