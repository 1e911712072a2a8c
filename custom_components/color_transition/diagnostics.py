"""Diagnostics support for the Color Transition integration."""

from __future__ import annotations

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import DOMAIN
from .coordinator import TransitionCoordinator


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant,
    entry: ConfigEntry,
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator: TransitionCoordinator | None = hass.data.get(DOMAIN)

    result: dict[str, Any] = {
        "config_entry": entry.as_dict(),
        "defaults": {},
        "active_transitions": {},
    }

    if coordinator is None:
        return result

    result["defaults"] = {
        "interval_ms": coordinator.interval_ms,
        "delay_ms": coordinator.delay_ms,
        "amount": coordinator.amount,
    }
    result["active_transitions"] = {
        transition_id: transition.as_dict()
        for transition_id, transition in coordinator.active_transitions.items()
    }

    return result
