"""
Mock GPIO Implementation

Simulated GPIO for development and testing without Raspberry Pi hardware.
Lets the daemon run on a laptop and lets tests script the config button.

This is a "Fake" test double - it keeps real pin state, just no hardware.
"""

import logging
from collections import deque
from typing import Iterable, Optional

from hardware.interfaces.gpio_interface import (
    GPIOError,
    GPIOInterface,
    PinState,
    PullMode,
)


class MockGPIO(GPIOInterface):
    """
    Simulated GPIO that mimics Raspberry Pi behavior.

    Input pins rest at the level their pull resistor gives them. Tests can
    override that with set_input_level() or queue a sequence of levels that
    successive read() calls consume.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)

        # Track pin configurations and states
        # Key: pin number, Value: dict with pin info
        self._pins: dict[int, dict] = {}

        # Scripted levels for input pins, consumed one per read()
        self._input_scripts: dict[int, deque] = {}

        # Every write as (pin, state), oldest first
        self.write_history: list[tuple[int, PinState]] = []

        self.logger.info("Mock GPIO initialized (simulation mode)")

    def setup_output(self, pin: int) -> None:
        """Configure pin as output"""
        self._pins[pin] = {
            'mode': 'output',
            'state': PinState.LOW,  # Start low
        }
        self.logger.debug(f"[MOCK] Pin {pin} configured as OUTPUT")

    def setup_input(
        self,
        pin: int,
        pull_mode: PullMode = PullMode.UP
    ) -> None:
        """Configure pin as input"""
        # With pull-up, pin starts HIGH (pulled to 3.3V)
        # With pull-down, pin starts LOW (pulled to 0V)
        initial_state = PinState.HIGH if pull_mode == PullMode.UP else PinState.LOW

        self._pins[pin] = {
            'mode': 'input',
            'state': initial_state,
            'pull': pull_mode,
        }
        self.logger.debug(
            f"[MOCK] Pin {pin} configured as INPUT "
            f"(pull: {pull_mode.value}, initial: {initial_state.name})"
        )

    def write(self, pin: int, state: PinState) -> None:
        """Set output pin state"""
        if pin not in self._pins:
            raise GPIOError(f"Pin {pin} not configured")

        if self._pins[pin]['mode'] != 'output':
            raise GPIOError(f"Pin {pin} not configured as output")

        old_state = self._pins[pin]['state']
        self._pins[pin]['state'] = state
        self.write_history.append((pin, state))

        if old_state != state:
            self.logger.debug(f"[MOCK] Pin {pin}: {old_state.name} -> {state.name}")

    def read(self, pin: int) -> PinState:
        """Read input pin state"""
        if pin not in self._pins:
            raise GPIOError(f"Pin {pin} not configured")

        script = self._input_scripts.get(pin)
        if script:
            self._pins[pin]['state'] = script.popleft()

        return self._pins[pin]['state']

    def cleanup(self, pins: Optional[list[int]] = None) -> None:
        """Reset pins to safe state"""
        if pins is None:
            pins_to_clean = list(self._pins.keys())
        else:
            pins_to_clean = pins

        for pin in pins_to_clean:
            self._pins.pop(pin, None)
            self._input_scripts.pop(pin, None)

        self.logger.info(f"[MOCK] Cleaned up pins: {pins_to_clean}")

    def is_available(self) -> bool:
        """Mock GPIO is always "available" (it's simulated)"""
        return True

    # =========================================================================
    # TESTING HELPER METHODS (not part of GPIOInterface)
    # =========================================================================
    # These methods are ONLY for testing - they simulate hardware events

    def set_input_level(self, pin: int, state: PinState) -> None:
        """
        Hold an input pin at the given level until changed again.

        With the default pull-up wiring, PinState.LOW is a pressed button.
        """
        self._require_input(pin)
        self._input_scripts.pop(pin, None)
        self._pins[pin]['state'] = state
        self.logger.debug(f"[MOCK] Pin {pin} held at {state.name}")

    def queue_input_levels(self, pin: int, states: Iterable[PinState]) -> None:
        """
        Queue levels that successive read() calls return, one each.

        Once the queue runs dry the pin keeps the last level read.

        Example:
            gpio.queue_input_levels(17, [PinState.HIGH, PinState.LOW])
        """
        self._require_input(pin)
        self._input_scripts.setdefault(pin, deque()).extend(states)

    def get_pin_state(self, pin: int) -> PinState:
        """
        Helper for tests to check current pin state.

        Returns:
            Current state of the pin
        """
        if pin not in self._pins:
            raise GPIOError(f"Pin {pin} not configured")
        return self._pins[pin]['state']

    def get_pin_info(self, pin: int) -> dict:
        """
        Get detailed pin information for debugging.

        Returns:
            Dictionary with pin configuration and state
        """
        if pin not in self._pins:
            raise GPIOError(f"Pin {pin} not configured")

        info = self._pins[pin].copy()
        info['queued_levels'] = len(self._input_scripts.get(pin, ()))
        return info

    def writes_to(self, pin: int) -> list[PinState]:
        """All states written to one pin, oldest first"""
        return [state for written_pin, state in self.write_history if written_pin == pin]

    def _require_input(self, pin: int) -> None:
        if pin not in self._pins or self._pins[pin]['mode'] != 'input':
            raise GPIOError(f"Pin {pin} not configured as input")
