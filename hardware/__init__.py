"""
Hardware Module

GPIO abstraction for the config button and status LED.

Provides automatic detection and graceful fallback between real hardware
and the mock implementation used for testing.

Public API:
    - HardwareFactory: Factory for creating hardware components
    - create_gpio: Quick GPIO creation with auto-detection
    - GPIOInterface: GPIO contract
    - GPIOError: Raised by any failing GPIO operation
    - ConfigButton: Active-low button input
    - StatusLED: Status LED output

Usage:
    from hardware import ConfigButton, StatusLED, create_gpio

    gpio = create_gpio()
    button = ConfigButton(gpio, pin=17)
    led = StatusLED(gpio, pin=27)
"""

from hardware.controllers.config_button import ConfigButton
from hardware.controllers.status_led import StatusLED
from hardware.factory import HardwareFactory, create_gpio
from hardware.interfaces.gpio_interface import GPIOError, GPIOInterface

__all__ = [
    "ConfigButton",
    "GPIOError",
    "GPIOInterface",
    "HardwareFactory",
    "StatusLED",
    "create_gpio",
]
