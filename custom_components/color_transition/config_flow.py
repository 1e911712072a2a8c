"""Config flow for Color Transition integration."""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant.config_entries import (
    ConfigEntry,
    ConfigFlow,
    ConfigFlowResult,
    OptionsFlowWithReload,
)
from homeassistant.core import callback

from .const import (
    DEFAULT_AMOUNT,
    DEFAULT_DELAY_MS,
    DEFAULT_INTERVAL_MS,
    DEFAULT_LOG_LEVEL,
    DOMAIN,
    OPTION_DEFAULT_AMOUNT,
    OPTION_DEFAULT_DELAY_MS,
    OPTION_DEFAULT_INTERVAL_MS,
    OPTION_LOG_LEVEL,
    VALID_LOG_LEVELS,
)

TITLE = "Color Transition"


class ColorTransitionConfigFlow(ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Color Transition."""

    VERSION = 1
    MINOR_VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None) -> ConfigFlowResult:
        """Handle the initial step."""
        # Only allow a single instance
        if self._async_current_entries():
            return self.async_abort(reason="single_instance_allowed")

        # Create entry immediately without showing a form
        return self.async_create_entry(title=TITLE, data={})

    async def async_step_import(
        self, _import_config: dict[str, Any] | None = None
    ) -> ConfigFlowResult:
        """Handle import from configuration.yaml or auto-setup."""
        if self._async_current_entries():
            return self.async_abort(reason="single_instance_allowed")

        return self.async_create_entry(title=TITLE, data={})

    @staticmethod
    @callback
    def async_get_options_flow(
        config_entry: ConfigEntry,
    ) -> ColorTransitionOptionsFlow:
        """Get the options flow for this handler."""
        return ColorTransitionOptionsFlow()


class ColorTransitionOptionsFlow(OptionsFlowWithReload):
    """Handle Color Transition options."""

    async def async_step_init(self, user_input: dict[str, Any] | None = None) -> ConfigFlowResult:
        """Handle options flow."""
        if user_input is not None:
            return self.async_create_entry(title="", data=user_input)

        options = self.config_entry.options

        data_schema = vol.Schema(
            {
                vol.Required(
                    OPTION_DEFAULT_INTERVAL_MS,
                    default=options.get(OPTION_DEFAULT_INTERVAL_MS, DEFAULT_INTERVAL_MS),
                ): vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False)),
                vol.Required(
                    OPTION_DEFAULT_DELAY_MS,
                    default=options.get(OPTION_DEFAULT_DELAY_MS, DEFAULT_DELAY_MS),
                ): vol.All(vol.Coerce(float), vol.Range(min=0)),
                vol.Required(
                    OPTION_DEFAULT_AMOUNT,
                    default=options.get(OPTION_DEFAULT_AMOUNT, DEFAULT_AMOUNT),
                ): vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False)),
                vol.Required(
                    OPTION_LOG_LEVEL,
                    default=options.get(OPTION_LOG_LEVEL, DEFAULT_LOG_LEVEL),
                ): vol.In(VALID_LOG_LEVELS),
            }
        )
        return self.async_show_form(step_id="init", data_schema=data_schema)
