"""
Tick Driver

Runs the state machine once per interval until told to stop.

The sleep function is injectable so tests can run hundreds of ticks
instantly. stop() may be called from a signal handler or another thread.
"""

import logging
import threading
import time
from typing import Callable, Optional

from config.settings import TICK_INTERVAL
from core.state_machine import ConfigModeStateMachine


class TickDriver:
    """
    Main loop: sleep, tick, repeat.

    Usage:
        driver = TickDriver(machine)
        driver.run()  # Blocks until driver.stop()
    """

    def __init__(
        self,
        machine: ConfigModeStateMachine,
        interval: float = TICK_INTERVAL,
        sleep: Callable[[float], None] = time.sleep,
        before_tick: Optional[Callable[[], None]] = None,
    ):
        """
        Args:
            machine: State machine to drive
            interval: Seconds between ticks
            sleep: Sleep function (swap for a fake in tests)
            before_tick: Optional hook run right before every tick
        """
        if interval < 0:
            raise ValueError(f"interval must not be negative, got {interval}")

        self.logger = logging.getLogger(__name__)
        self.machine = machine
        self.interval = interval
        self._sleep = sleep
        self._before_tick = before_tick
        self._stop_event = threading.Event()

    @property
    def running(self) -> bool:
        return not self._stop_event.is_set()

    def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick until stop() is called, or max_ticks ticks have run.

        An error raised by a tick ends the loop and propagates.

        Returns:
            Number of ticks performed
        """
        ticks = 0
        self.logger.info(f"Tick loop started (interval: {self.interval}s)")

        while not self._stop_event.is_set():
            if max_ticks is not None and ticks >= max_ticks:
                break

            self._sleep(self.interval)

            # stop() during the sleep skips the pending tick
            if self._stop_event.is_set():
                break

            if self._before_tick:
                self._before_tick()
            self.machine.tick()
            ticks += 1

        self.logger.info(f"Tick loop stopped after {ticks} ticks")
        return ticks

    def stop(self) -> None:
        """Ask the loop to exit. Safe to call from any thread."""
        self._stop_event.set()
