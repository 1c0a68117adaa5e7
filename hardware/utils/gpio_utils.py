"""
GPIO Utilities

Shared helper functions used by both pin controllers.
"""

import logging
from typing import Optional

from hardware.interfaces.gpio_interface import GPIOInterface


def safe_gpio_cleanup(
    gpio: Optional[GPIOInterface],
    pins: Optional[list[int]] = None,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Safely clean up GPIO pins with error handling.

    Cleanup runs on the way out of the process, often after another
    failure, so it must never raise.

    Args:
        gpio: GPIO interface to clean up, or None
        pins: Specific pins to clean, or None for all
        logger: Optional logger for error messages
    """
    if gpio is None:
        return

    try:
        gpio.cleanup(pins)
    except Exception as e:
        if logger:
            logger.error(f"Error during GPIO cleanup: {e}")


def read_pin_level(gpio: GPIOInterface, pin: int) -> int:
    """
    Read a pin as a plain 0/1 logic level.

    Example:
        if read_pin_level(self.gpio, 17) == 0:
            print("Button is pressed")
    """
    return gpio.read(pin).value


def format_pin(pin: Optional[int]) -> str:
    """Human readable pin number, "disabled" for an absent pin"""
    return str(pin) if pin is not None else "disabled"
