"""
Status LED

Single output pin showing where the config-mode cycle is:
- off: idle
- blinking (toggled once per tick): waiting for a connection
- solid on: connected

The blink itself is driven by the state machine writing alternating levels,
so this controller has no timer or thread of its own.
"""

import logging
from typing import Any, Dict, Optional

from hardware.interfaces.gpio_interface import GPIOInterface, PinState
from hardware.utils.gpio_utils import safe_gpio_cleanup


class StatusLED:
    """
    Drives the status LED on one GPIO pin.

    Usage:
        led = StatusLED(gpio, pin=27)
        led.write_level(1)
        led.off()
        led.cleanup()
    """

    def __init__(self, gpio: GPIOInterface, pin: int):
        """
        Configure the pin as an output, starting LOW.

        Raises:
            GPIOError: If the pin cannot be acquired
        """
        self.logger = logging.getLogger(__name__)
        self.gpio = gpio
        self.pin = pin
        self.level: Optional[int] = None  # Last level written, None before first write
        self._cleaned_up = False

        self.gpio.setup_output(self.pin)
        self.logger.info(f"Status LED initialized on GPIO {self.pin}")

    def write_level(self, level: int) -> None:
        """
        Drive the pin to a 0/1 logic level.

        Raises:
            GPIOError: If the write fails
        """
        self.gpio.write(self.pin, PinState.from_level(level))
        self.level = 1 if level else 0

    def off(self) -> None:
        self.write_level(0)

    def get_status(self) -> Dict[str, Any]:
        return {
            "pin": self.pin,
            "level": self.level,
            "gpio_available": self.gpio.is_available(),
        }

    def cleanup(self) -> None:
        """
        Turn the LED off and release the pin.

        Never raises - a failed write is logged and cleanup continues.
        Safe to call multiple times - idempotent.
        """
        if self._cleaned_up:
            return

        try:
            self.off()
        except Exception as e:
            self.logger.warning(f"Could not turn LED off during cleanup: {e}")

        safe_gpio_cleanup(self.gpio, [self.pin], self.logger)
        self._cleaned_up = True
        self.logger.info("Status LED cleanup complete")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()
        return False
