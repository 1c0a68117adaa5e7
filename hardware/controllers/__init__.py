"""
Controllers Package

Pin-level controllers for the config button and the status LED.
"""

from hardware.controllers.config_button import ConfigButton
from hardware.controllers.status_led import StatusLED

# Public API (sorted alphabetically)
__all__ = [
    "ConfigButton",
    "StatusLED",
]
