"""Constants for the Color Transition integration."""

DOMAIN = "color_transition"

# Services
SERVICE_START_TRANSITION = "start_transition"
SERVICE_STOP_TRANSITION = "stop_transition"

# Events
EVENT_TRANSITION_STEP = f"{DOMAIN}_step"
EVENT_TRANSITION_FINISHED = f"{DOMAIN}_finished"

# Service attributes
ATTR_TRANSITION_ID = "transition_id"
ATTR_FROM = "from"
ATTR_TO = "to"
ATTR_COLORS = "colors"
ATTR_INTERVAL_MS = "interval_ms"
ATTR_DELAY_MS = "delay_ms"
ATTR_AMOUNT = "amount"

# Event attributes
ATTR_STEP = "step"
ATTR_STEPS = "steps"
ATTR_COMPLETED = "completed"

# Option keys
OPTION_DEFAULT_INTERVAL_MS = "default_interval_ms"
OPTION_DEFAULT_DELAY_MS = "default_delay_ms"
OPTION_DEFAULT_AMOUNT = "default_amount"
OPTION_LOG_LEVEL = "log_level"

# Log levels
LOG_LEVEL_WARNING = "warning"
LOG_LEVEL_INFO = "info"
LOG_LEVEL_DEBUG = "debug"
VALID_LOG_LEVELS = [LOG_LEVEL_WARNING, LOG_LEVEL_INFO, LOG_LEVEL_DEBUG]

# Defaults (used when neither the service call nor the options set a value)
DEFAULT_INTERVAL_MS = 1
DEFAULT_DELAY_MS = 0
DEFAULT_AMOUNT = 1
DEFAULT_LOG_LEVEL = LOG_LEVEL_WARNING
