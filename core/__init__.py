"""
Core config-mode logic.

Public API:
    - ConfigModeStateMachine: The IDLE / WAIT_CONNECT / CONNECTED machine
    - Phase: Machine phases
    - RuntimeState: Phase plus connect timer
    - TickDriver: Once-per-interval main loop
    - ConsoleMessageSink: Prefixed console output
    - MessageRecorder: In-memory sink for tests

Usage:
    from core import ConfigModeStateMachine, ConsoleMessageSink, TickDriver

    machine = ConfigModeStateMachine(button, led, ConsoleMessageSink())
    machine.start()
    TickDriver(machine).run()
"""

from core.messages import ConsoleMessageSink, MessageRecorder
from core.state_machine import ConfigModeStateMachine, Phase, RuntimeState
from core.tick_driver import TickDriver

__all__ = [
    "ConfigModeStateMachine",
    "ConsoleMessageSink",
    "MessageRecorder",
    "Phase",
    "RuntimeState",
    "TickDriver",
]
