"""
Config Mode State Machine

Decides, once per tick, what to do with the config button and status LED.

State Flow:
    IDLE --(button pressed)--> WAIT_CONNECT --(timeout)--> IDLE
                                    |
                       (companion process, external)
                                    v
                               CONNECTED --(timeout)--> IDLE

LED:
- WAIT_CONNECT: toggles every tick (blink)
- CONNECTED: solid on
- On timeout: switched off before the phase changes back to IDLE

Nothing in this module enters CONNECTED by itself. The companion process
that handles the actual connection asks for it through request_phase().
"""

import logging
import queue
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional

from config.settings import CONNECT_TIMEOUT
from core.messages import MessageSink
from hardware.controllers.config_button import ConfigButton
from hardware.controllers.status_led import StatusLED


class Phase(Enum):
    IDLE = "IDLE"
    WAIT_CONNECT = "WAIT_CONNECT"
    CONNECTED = "CONNECTED"


@dataclass
class RuntimeState:
    """
    Mutable state of the machine.

    connect_timer only means something outside IDLE. After every tick,
    phase != IDLE implies connect_timer > 0.
    """

    phase: Phase = Phase.IDLE
    connect_timer: int = 0


class ConfigModeStateMachine:
    """
    Three-phase state machine gating entry into configuration mode.

    Either pin controller may be None, in which case everything that
    depends on it is skipped. Without a button the machine never leaves
    IDLE on its own. Without an LED, phases still change and are still
    reported, only the LED writes and "LED: ..." messages go away.

    GPIO errors are not handled here, they propagate to the caller.

    Usage:
        machine = ConfigModeStateMachine(button, led, ConsoleMessageSink())
        machine.start()
        while True:
            time.sleep(1)
            machine.tick()
    """

    def __init__(
        self,
        button: Optional[ConfigButton],
        led: Optional[StatusLED],
        message_sink: MessageSink,
        connect_timeout: int = CONNECT_TIMEOUT,
    ):
        if connect_timeout <= 0:
            raise ValueError(f"connect_timeout must be positive, got {connect_timeout}")

        self.logger = logging.getLogger(__name__)
        self.button = button
        self.led = led
        self.message = message_sink
        self.connect_timeout = connect_timeout

        self._state = RuntimeState()
        self.tick_count = 0

        self.state_handlers = {
            Phase.IDLE: self._tick_idle,
            Phase.WAIT_CONNECT: self._tick_wait_connect,
            Phase.CONNECTED: self._tick_connected,
        }

        # Phase changes asked for by other threads, applied by tick()
        self._pending_phases: "queue.Queue[Phase]" = queue.Queue()

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    @property
    def state(self) -> RuntimeState:
        """Snapshot of the runtime state (a copy, safe to keep)"""
        return replace(self._state)

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def connect_timer(self) -> int:
        return self._state.connect_timer

    def start(self) -> None:
        """Announce the initial IDLE phase"""
        self.message(f"State: {Phase.IDLE.value}")

    def request_phase(self, phase: Phase) -> None:
        """
        Ask for a phase change from outside the tick loop.

        Thread-safe. The change is applied at the start of the next tick,
        so the tick loop stays the only writer of the runtime state.
        """
        self.logger.debug(f"Phase change requested: {phase.value}")
        self._pending_phases.put(phase)

    def tick(self) -> None:
        """
        Run one step of the machine.

        Raises:
            GPIOError: If reading the button or writing the LED fails
        """
        self.tick_count += 1
        self._apply_pending_phases()

        self.state_handlers[self._state.phase]()

    def get_status_info(self) -> Dict[str, Any]:
        """Get detailed status information for debugging/monitoring"""
        return {
            "phase": self._state.phase.value,
            "connect_timer": self._state.connect_timer,
            "tick_count": self.tick_count,
            "button_pin": self.button.pin if self.button else None,
            "led_pin": self.led.pin if self.led else None,
            "pending_requests": self._pending_phases.qsize(),
        }

    # =========================================================================
    # PER-PHASE TICK HANDLERS
    # =========================================================================

    def _tick_idle(self) -> None:
        if self.button is None:
            return

        if self.button.is_pressed():
            self.message("Config button: pressed")
            self.message(f"State: {Phase.WAIT_CONNECT.value}")
            self._enter(Phase.WAIT_CONNECT, self.connect_timeout)

    def _tick_wait_connect(self) -> None:
        self._state.connect_timer -= 1
        if self._state.connect_timer <= 0:
            self._timeout()
            return

        if self.led is not None:
            level = self._state.connect_timer % 2
            self.led.write_level(level)
            self.message(f"LED: {level}")

    def _tick_connected(self) -> None:
        self._state.connect_timer -= 1
        if self._state.connect_timer <= 0:
            self._timeout()
            return

        if self.led is not None:
            self.led.write_level(1)
            self.message("LED: On")

    # =========================================================================
    # TRANSITIONS
    # =========================================================================

    def _timeout(self) -> None:
        # LED goes off before the phase changes
        if self.led is not None:
            self.led.off()
            self.message("LED: off")
        self.message(f"State: {Phase.IDLE.value} (timeout)")
        self._enter(Phase.IDLE, 0)

    def _enter(self, phase: Phase, connect_timer: int) -> None:
        old_phase = self._state.phase
        self._state.phase = phase
        self._state.connect_timer = connect_timer
        self.logger.debug(
            f"Phase transition: {old_phase.value} -> {phase.value} "
            f"(timer: {connect_timer})",
        )

    def _apply_pending_phases(self) -> None:
        while True:
            try:
                phase = self._pending_phases.get_nowait()
            except queue.Empty:
                return
            self._apply_phase(phase)

    def _apply_phase(self, phase: Phase) -> None:
        if phase == self._state.phase:
            self.logger.debug(f"Already in phase {phase.value}")
            return

        self.logger.info(f"External phase change: {self._state.phase.value} -> {phase.value}")

        if phase == Phase.IDLE:
            if self.led is not None:
                self.led.off()
            self.message(f"State: {Phase.IDLE.value}")
            self._enter(Phase.IDLE, 0)
        elif phase == Phase.WAIT_CONNECT:
            self.message(f"State: {Phase.WAIT_CONNECT.value}")
            self._enter(Phase.WAIT_CONNECT, self.connect_timeout)
        else:
            # A connection made during WAIT_CONNECT keeps the running countdown
            timer = self._state.connect_timer
            if self._state.phase == Phase.IDLE or timer <= 0:
                timer = self.connect_timeout
            self.message(f"State: {Phase.CONNECTED.value}")
            self._enter(Phase.CONNECTED, timer)
