"""The Color Transition integration."""

from __future__ import annotations

import contextlib
import logging
from typing import Any

import voluptuous as vol
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, ServiceCall, callback
from homeassistant.helpers import config_validation as cv
from homeassistant.helpers.typing import ConfigType

from .const import (
    ATTR_AMOUNT,
    ATTR_COLORS,
    ATTR_DELAY_MS,
    ATTR_FROM,
    ATTR_INTERVAL_MS,
    ATTR_TO,
    ATTR_TRANSITION_ID,
    DEFAULT_AMOUNT,
    DEFAULT_DELAY_MS,
    DEFAULT_INTERVAL_MS,
    DEFAULT_LOG_LEVEL,
    DOMAIN,
    OPTION_DEFAULT_AMOUNT,
    OPTION_DEFAULT_DELAY_MS,
    OPTION_DEFAULT_INTERVAL_MS,
    OPTION_LOG_LEVEL,
    SERVICE_START_TRANSITION,
    SERVICE_STOP_TRANSITION,
    VALID_LOG_LEVELS,
)
from .coordinator import TransitionCoordinator
from .transition_params import TransitionParams

_LOGGER = logging.getLogger(__name__)

CONFIG_SCHEMA = cv.config_entry_only_config_schema(DOMAIN)

# =============================================================================
# Service Schema
# =============================================================================

# Shared validators, also used by the options flow
INTERVAL_MS = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))
DELAY_MS = vol.All(vol.Coerce(float), vol.Range(min=0))
AMOUNT = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))

_RGB_CHANNEL = vol.All(vol.Coerce(int), vol.Range(min=0, max=255))
_RGB_COLOR = vol.ExactSequence([_RGB_CHANNEL] * 3)


def _has_one_mode(data: dict[str, Any]) -> dict[str, Any]:
    """Require either from/to endpoints or a colors list, but not both."""
    has_endpoints = ATTR_FROM in data or ATTR_TO in data
    has_colors = ATTR_COLORS in data
    if has_endpoints and has_colors:
        raise vol.Invalid(f"'{ATTR_COLORS}' cannot be combined with '{ATTR_FROM}'/'{ATTR_TO}'")
    if not has_endpoints and not has_colors:
        raise vol.Invalid(f"Either '{ATTR_FROM}' and '{ATTR_TO}' or '{ATTR_COLORS}' is required")
    return data


START_TRANSITION_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Required(ATTR_TRANSITION_ID): cv.string,
            vol.Inclusive(ATTR_FROM, "endpoints"): _RGB_COLOR,
            vol.Inclusive(ATTR_TO, "endpoints"): _RGB_COLOR,
            vol.Optional(ATTR_COLORS): vol.All(cv.ensure_list, [_RGB_COLOR], vol.Length(min=1)),
            vol.Optional(ATTR_INTERVAL_MS): INTERVAL_MS,
            vol.Optional(ATTR_DELAY_MS): DELAY_MS,
            vol.Optional(ATTR_AMOUNT): AMOUNT,
        }
    ),
    _has_one_mode,
)

STOP_TRANSITION_SCHEMA = vol.Schema({vol.Required(ATTR_TRANSITION_ID): cv.string})


# =============================================================================
# Integration Setup
# =============================================================================


async def async_setup(hass: HomeAssistant, _config: ConfigType) -> bool:
    """Set up the Color Transition component."""
    if not hass.config_entries.async_entries(DOMAIN):
        hass.async_create_task(
            hass.config_entries.flow.async_init(DOMAIN, context={"source": "import"})
        )
    return True


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Color Transition from a config entry."""
    coordinator = TransitionCoordinator(
        hass,
        interval_ms=entry.options.get(OPTION_DEFAULT_INTERVAL_MS, DEFAULT_INTERVAL_MS),
        delay_ms=entry.options.get(OPTION_DEFAULT_DELAY_MS, DEFAULT_DELAY_MS),
        amount=entry.options.get(OPTION_DEFAULT_AMOUNT, DEFAULT_AMOUNT),
    )
    hass.data[DOMAIN] = coordinator

    @callback
    def handle_start_transition(call: ServiceCall) -> None:
        """Start (or restart) a transition."""
        params = TransitionParams.from_service_data(dict(call.data))
        coordinator.async_start_transition(params)

    @callback
    def handle_stop_transition(call: ServiceCall) -> None:
        """Stop a running transition."""
        coordinator.async_stop_transition(call.data[ATTR_TRANSITION_ID])

    hass.services.async_register(
        DOMAIN,
        SERVICE_START_TRANSITION,
        handle_start_transition,
        schema=START_TRANSITION_SCHEMA,
    )
    hass.services.async_register(
        DOMAIN,
        SERVICE_STOP_TRANSITION,
        handle_stop_transition,
        schema=STOP_TRANSITION_SCHEMA,
    )

    # Apply stored log level on startup
    await _apply_stored_log_level(hass, entry)

    return True


async def _apply_stored_log_level(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Apply the stored log level setting."""
    log_level = entry.options.get(OPTION_LOG_LEVEL, DEFAULT_LOG_LEVEL)
    if log_level not in VALID_LOG_LEVELS:
        log_level = DEFAULT_LOG_LEVEL

    # Logger service may not be available in tests
    with contextlib.suppress(Exception):
        await hass.services.async_call(
            "logger",
            "set_level",
            {f"custom_components.{DOMAIN}": log_level},
        )


async def async_unload_entry(hass: HomeAssistant, _entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    coordinator: TransitionCoordinator = hass.data[DOMAIN]
    coordinator.async_shutdown()

    hass.services.async_remove(DOMAIN, SERVICE_START_TRANSITION)
    hass.services.async_remove(DOMAIN, SERVICE_STOP_TRANSITION)
    hass.data.pop(DOMAIN, None)

    return True
