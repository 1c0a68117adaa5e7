"""
Hardware Implementations Package

Exposes concrete implementations of hardware interfaces.
"""

from hardware.implementations.mock_gpio import MockGPIO
from hardware.implementations.rpi_gpio import RaspberryPiGPIO

# Public API (sorted alphabetically)
__all__ = [
    "MockGPIO",
    "RaspberryPiGPIO",
]
