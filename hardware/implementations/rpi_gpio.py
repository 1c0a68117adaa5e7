"""
Raspberry Pi GPIO Implementation

GPIOInterface backed by RPi.GPIO in BCM numbering. Only the calls the
daemon needs are wrapped: pin setup, single reads and writes, cleanup.
"""

import logging
from typing import Any, Callable, Optional

try:
    from RPi import GPIO

    GPIO_AVAILABLE = True
except (ImportError, RuntimeError):
    # RuntimeError: RPi.GPIO installed but not running on a Pi
    GPIO_AVAILABLE = False

from hardware.interfaces.gpio_interface import (
    GPIOError,
    GPIOInterface,
    PinState,
    PullMode,
)


def _driver_call(action: str, func: Callable[..., Any], *args, **kwargs) -> Any:
    """Run an RPi.GPIO call, turning any driver failure into GPIOError"""
    try:
        return func(*args, **kwargs)
    except Exception as e:
        raise GPIOError(f"Failed to {action}: {e}") from e


class RaspberryPiGPIO(GPIOInterface):
    """
    Raspberry Pi pins through RPi.GPIO.

    Raises GPIOError on construction when the library cannot be used, which
    is what lets HardwareFactory fall back to MockGPIO off-device.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._configured_pins: set[int] = set()

        if not GPIO_AVAILABLE:
            raise GPIOError(
                "RPi.GPIO library not available. Install with: pip install RPi.GPIO",
            )

        _driver_call("select BCM numbering", GPIO.setmode, GPIO.BCM)
        GPIO.setwarnings(False)
        self.logger.info("Raspberry Pi GPIO ready (BCM numbering)")

    def setup_output(self, pin: int) -> None:
        _driver_call(
            f"set up GPIO {pin} as output",
            GPIO.setup, pin, GPIO.OUT, initial=GPIO.LOW,
        )
        self._configured_pins.add(pin)
        self.logger.debug(f"GPIO {pin}: output, initially LOW")

    def setup_input(
        self,
        pin: int,
        pull_mode: PullMode = PullMode.UP,
    ) -> None:
        pull = {
            PullMode.UP: GPIO.PUD_UP,
            PullMode.DOWN: GPIO.PUD_DOWN,
            PullMode.NONE: GPIO.PUD_OFF,
        }[pull_mode]
        _driver_call(
            f"set up GPIO {pin} as input",
            GPIO.setup, pin, GPIO.IN, pull_up_down=pull,
        )
        self._configured_pins.add(pin)
        self.logger.debug(f"GPIO {pin}: input, pull {pull_mode.value}")

    def write(self, pin: int, state: PinState) -> None:
        level = GPIO.HIGH if state == PinState.HIGH else GPIO.LOW
        _driver_call(f"write GPIO {pin}", GPIO.output, pin, level)

    def read(self, pin: int) -> PinState:
        value = _driver_call(f"read GPIO {pin}", GPIO.input, pin)
        return PinState.from_level(value)

    def cleanup(self, pins: Optional[list[int]] = None) -> None:
        """Release pins (all configured ones by default). Logs, never raises."""
        targets = sorted(self._configured_pins if pins is None else set(pins))
        if not targets:
            return

        try:
            GPIO.cleanup(targets)
        except Exception as e:
            self.logger.error(f"GPIO cleanup of {targets} failed: {e}")
            return

        self._configured_pins.difference_update(targets)
        self.logger.info(f"Released GPIO pins {targets}")

    def is_available(self) -> bool:
        return GPIO_AVAILABLE
