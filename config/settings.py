"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Machine-specific values (pin numbers, paths) can be overridden in .env
- Import these settings in modules: from config.settings import CONNECT_TIMEOUT
- CLI flags in app_daemon.py override the values below
"""

import os
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def parse_optional_pin(value: Optional[str]) -> Optional[int]:
    """
    Turn a raw pin setting into a BCM pin number, or None when disabled.

    Unset, empty and negative values all mean "no pin wired".

    Raises:
        ValueError: If the value is not an integer
    """
    if value is None or value.strip() == "":
        return None
    pin = int(value)
    return pin if pin >= 0 else None


# =============================================================================
# HARDWARE CONFIGURATION
# =============================================================================

# GPIO Pin Assignments (BCM numbering, None = disabled)
CONFIG_GPIO_PIN = parse_optional_pin(os.getenv("APPDAEMON_CONFIG_GPIO"))
LED_GPIO_PIN = parse_optional_pin(os.getenv("APPDAEMON_LED_GPIO"))

# GPIO backend: "auto" (real if available), "real" or "mock"
GPIO_MODE = os.getenv("APPDAEMON_GPIO_MODE", "auto")

# =============================================================================
# CONFIG MODE STATE MACHINE
# =============================================================================

# Ticks spent waiting for a connection before falling back to idle
CONNECT_TIMEOUT = 300

# Seconds between two state machine ticks
TICK_INTERVAL = float(os.getenv("APPDAEMON_TICK_INTERVAL", "1.0"))

# Every console message starts with this
MESSAGE_PREFIX = "**** AppDaemon: "

# =============================================================================
# REMOTE CONTROL
# =============================================================================

# File-based control for the companion process
# Commands: CONNECTED, WAIT_CONNECT, IDLE, STATUS
CONTROL_FILE = os.getenv(
    "APPDAEMON_CONTROL_FILE",
    "/tmp/appdaemon_control.cmd",  # noqa: S108
)

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_DIR = os.getenv("APPDAEMON_LOG_DIR", "/var/log/appdaemon")
LOG_SERVICE_FILE = "appdaemon.log"
LOG_FALLBACK_DIR = "logs"
LOG_BACKUP_COUNT = 7  # Days of rotated logs to keep
