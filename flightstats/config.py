# Runtime settings, read once from the environment (and a .env file if present)

import logging
import os

from dotenv import load_dotenv

from .errors import ConfigError

load_dotenv()

MISSING_SCHEDULE_POLICIES = ('skip', 'raise')


def env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# Input / output locations
FLIGHTS_FILE = os.getenv('FLIGHTS_FILE', 'flights.json')
OUTPUT_DIR = os.getenv('FLIGHTS_OUTPUT_DIR', 'outputs')

# Projection behaviour
MISSING_SCHEDULE_POLICY = os.getenv('MISSING_SCHEDULE_POLICY', 'skip').strip().lower()
ROLL_OVERNIGHT = env_flag('ROLL_OVERNIGHT', False)

LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').strip().upper()
LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def check_settings() -> None:
    """Raises ConfigError if MISSING_SCHEDULE_POLICY or LOG_LEVEL is not a known value."""
    if MISSING_SCHEDULE_POLICY not in MISSING_SCHEDULE_POLICIES:
        raise ConfigError(f"MISSING_SCHEDULE_POLICY must be one of {MISSING_SCHEDULE_POLICIES}, "
                          f"got {MISSING_SCHEDULE_POLICY!r}")
    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        raise ConfigError(f"LOG_LEVEL must be a logging level name such as INFO or DEBUG, got {LOG_LEVEL!r}")
