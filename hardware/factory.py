"""
Hardware Factory

One place that decides which GPIO backend the daemon gets:

    mock -> MockGPIO, always
    real -> RaspberryPiGPIO, or RuntimeError when the Pi driver is missing
    auto -> RaspberryPiGPIO when it works, MockGPIO (with a warning) otherwise
"""

import logging
from typing import Literal

from hardware.implementations.mock_gpio import MockGPIO
from hardware.implementations.rpi_gpio import RaspberryPiGPIO
from hardware.interfaces.gpio_interface import GPIOInterface

HardwareMode = Literal["auto", "real", "mock"]

HARDWARE_MODES = ("auto", "real", "mock")


class HardwareFactory:
    """
    Usage:
        gpio = HardwareFactory.create_gpio()             # auto-detect
        gpio = HardwareFactory.create_gpio(mode="mock")  # laptop / tests
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_gpio(
        cls,
        mode: HardwareMode = "auto",
    ) -> GPIOInterface:
        """
        Raises:
            ValueError: If mode is not one of HARDWARE_MODES
            RuntimeError: If mode="real" but the Pi driver cannot be used
        """
        if mode not in HARDWARE_MODES:
            raise ValueError(f"Unknown hardware mode: {mode}")

        if mode == "mock":
            cls._logger.info("GPIO backend: mock (requested)")
            return MockGPIO()

        try:
            gpio = RaspberryPiGPIO()
        except Exception as e:
            if mode == "real":
                raise RuntimeError(f"Real GPIO requested but not available: {e}") from e
            cls._logger.warning(f"GPIO backend: mock (Pi driver unavailable: {e})")
            return MockGPIO()

        cls._logger.info(f"GPIO backend: Raspberry Pi ({mode})")
        return gpio


def create_gpio(force_mock: bool = False) -> GPIOInterface:
    """Shortcut: auto-detected GPIO, or the mock when force_mock is set"""
    return HardwareFactory.create_gpio(mode="mock" if force_mock else "auto")
