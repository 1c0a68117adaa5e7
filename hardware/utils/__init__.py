"""
Hardware Utilities Package

Exposes shared utility functions for hardware operations.

Public API:
    - safe_gpio_cleanup: Safe GPIO pin cleanup with error handling
    - read_pin_level: Read pin state as a 0/1 level
    - format_pin: Render an optional pin number for log output

Usage:
    from hardware.utils import read_pin_level

    if read_pin_level(gpio, 17) == 0:
        print("pressed")
"""

from hardware.utils.gpio_utils import (
    format_pin,
    read_pin_level,
    safe_gpio_cleanup,
)

# Public API (sorted alphabetically)
__all__ = [
    "format_pin",
    "read_pin_level",
    "safe_gpio_cleanup",
]
