"""Shared pytest fixtures for Color Transition tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from datetime import timedelta

import pytest
from homeassistant.core import HomeAssistant
from homeassistant.util import dt as dt_util
from pytest_homeassistant_custom_component.common import (
    MockConfigEntry,
    async_fire_time_changed,
)

from custom_components.color_transition.const import DOMAIN


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(enable_custom_integrations: None) -> Generator[None]:
    """Enable loading of custom_components in every test."""
    yield


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Create a config entry for the integration."""
    return MockConfigEntry(domain=DOMAIN, title="Color Transition", data={}, options={})


@pytest.fixture
async def init_integration(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry
) -> MockConfigEntry:
    """Set up the integration from a config entry."""
    mock_config_entry.add_to_hass(hass)
    await hass.config_entries.async_setup(mock_config_entry.entry_id)
    await hass.async_block_till_done()
    return mock_config_entry


@pytest.fixture
def advance(hass: HomeAssistant) -> Callable[[float], None]:
    """Fire every timer due within the given number of milliseconds.

    A recurring interval reschedules itself while firing, so each call runs
    at most one tick of it.
    """

    def _advance(ms: float) -> None:
        async_fire_time_changed(hass, dt_util.utcnow() + timedelta(milliseconds=ms))

    return _advance
