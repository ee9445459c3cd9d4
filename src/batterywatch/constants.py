from datetime import timedelta

# Battery level at or below which a discharging device is shut down
CRITICAL_SHUTDOWN_LEVEL = 5

# Temperature thresholds for the danger classifier
DANGER_HIGH_TEMPERATURE = 55
DANGER_LOW_TEMPERATURE = 0

# Minimum spacing between two dangerous-temperature wake-ups
DANGER_ANNOUNCE_INTERVAL: timedelta = timedelta(minutes=10)

# Default wake-up poll cadence used by the bundled scheduler
DEFAULT_POLL_SECONDS = 60

# Skill and app URL roots understood by the invocation collaborator
DEFAULT_SKILL_BASE_URL = "yoda-skill://battery"
DEFAULT_SHUTDOWN_URL = "yoda-app://system/shutdown"
