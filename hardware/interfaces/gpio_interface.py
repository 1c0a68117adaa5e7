"""
GPIO Interface - Abstract Hardware Layer

This defines the contract (interface) that any GPIO implementation must follow.
The state machine only ever talks to pins through this interface, never to
RPi.GPIO directly.

Why use an abstract interface?
1. Testability: Can swap real GPIO with mock for tests
2. Simulation: Can run the daemon on a laptop with scripted button levels
3. Type safety: mypy can check you're using GPIO correctly
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class PinMode(Enum):
    """How a GPIO pin is configured"""

    INPUT = "input"  # Read signals (config button)
    OUTPUT = "output"  # Send signals (status LED)


class PullMode(Enum):
    """Pull resistor configuration for input pins"""

    UP = "up"  # Pull to HIGH (3.3V) - button press reads LOW
    DOWN = "down"  # Pull to LOW (0V) - button press reads HIGH
    NONE = "none"  # No pull resistor (external resistor required)


class PinState(Enum):
    """Digital pin states"""

    LOW = 0  # 0V / False
    HIGH = 1  # 3.3V / True

    @classmethod
    def from_level(cls, level: int) -> "PinState":
        """Map a 0/1 logic level onto a PinState"""
        return cls.HIGH if level else cls.LOW


class GPIOInterface(ABC):
    """
    Abstract base class for GPIO operations.

    Any class that inherits from this MUST implement all @abstractmethod methods.
    """

    @abstractmethod
    def setup_output(self, pin: int) -> None:
        """
        Configure a pin as an output (for the status LED).

        Args:
            pin: GPIO pin number (BCM numbering)

        Raises:
            GPIOError: If pin setup fails
        """

    @abstractmethod
    def setup_input(
        self,
        pin: int,
        pull_mode: PullMode = PullMode.UP,
    ) -> None:
        """
        Configure a pin as an input (for reading the config button).

        Args:
            pin: GPIO pin number (BCM numbering)
            pull_mode: Internal pull resistor configuration

        Raises:
            GPIOError: If pin setup fails
        """

    @abstractmethod
    def write(self, pin: int, state: PinState) -> None:
        """
        Set an output pin to HIGH or LOW.

        Raises:
            GPIOError: If pin isn't configured as output
        """

    @abstractmethod
    def read(self, pin: int) -> PinState:
        """
        Read the current state of an input pin.

        Returns:
            Current pin state (HIGH/LOW)

        Raises:
            GPIOError: If pin isn't configured
        """

    @abstractmethod
    def cleanup(self, pins: Optional[list[int]] = None) -> None:
        """
        Reset GPIO pins to safe state and release resources.

        Args:
            pins: Specific pins to cleanup, or None for all pins
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if GPIO hardware is actually available.

        Returns:
            True if running on real hardware, False if simulated
        """


class GPIOError(Exception):
    """
    Custom exception for GPIO-related errors.

    The daemon has no recovery path for these: a failure while acquiring
    pins aborts startup, a failure during a tick ends the process.
    """
