"""
Config Button

Polled input for the configuration-mode button.

The button is wired active-low: the internal pull-up holds the pin HIGH
while released, pressing it shorts the pin to ground (LOW). There is no
interrupt handling or debouncing here - the state machine samples the pin
once per tick, which is slow enough that contact bounce never matters.
"""

import logging
from typing import Any, Dict

from hardware.interfaces.gpio_interface import GPIOInterface, PullMode
from hardware.utils.gpio_utils import read_pin_level, safe_gpio_cleanup

# Logic level of a pressed button (active-low)
PRESSED_LEVEL = 0


class ConfigButton:
    """
    Reads the config button on one GPIO pin.

    Usage:
        with ConfigButton(gpio, pin=17) as button:
            if button.is_pressed():
                print("enter config mode")
    """

    def __init__(self, gpio: GPIOInterface, pin: int):
        """
        Configure the pin as an input with pull-up.

        Raises:
            GPIOError: If the pin cannot be acquired
        """
        self.logger = logging.getLogger(__name__)
        self.gpio = gpio
        self.pin = pin
        self._cleaned_up = False

        self.gpio.setup_input(self.pin, pull_mode=PullMode.UP)
        self.logger.info(f"Config button initialized on GPIO {self.pin}")

    def read_level(self) -> int:
        """Raw logic level of the pin (0 or 1)"""
        return read_pin_level(self.gpio, self.pin)

    def is_pressed(self) -> bool:
        return self.read_level() == PRESSED_LEVEL

    def get_status(self) -> Dict[str, Any]:
        return {
            "pin": self.pin,
            "gpio_available": self.gpio.is_available(),
        }

    def cleanup(self) -> None:
        """
        Release the button pin.

        Safe to call multiple times - idempotent.
        """
        if self._cleaned_up:
            return

        safe_gpio_cleanup(self.gpio, [self.pin], self.logger)
        self._cleaned_up = True
        self.logger.info("Config button cleanup complete")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()
        return False
