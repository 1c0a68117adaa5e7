"""
Console Messages

The daemon reports every state change as a prefixed console line, e.g.
"**** AppDaemon: State: WAIT_CONNECT". Other tools grep for these lines,
so the text is part of the interface.

A message sink is any callable taking the message text.
"""

import logging
from typing import Callable, List

from config.settings import MESSAGE_PREFIX

MessageSink = Callable[[str], None]

# Logger carrying the console messages
MESSAGE_LOGGER = "appdaemon"


class ConsoleMessageSink:
    """Emit prefixed messages through the logging system at INFO."""

    def __init__(self, prefix: str = MESSAGE_PREFIX, logger_name: str = MESSAGE_LOGGER):
        self.prefix = prefix
        self.logger = logging.getLogger(logger_name)

    def __call__(self, text: str) -> None:
        self.logger.info(f"{self.prefix}{text}")


class MessageRecorder:
    """
    Sink that keeps every message it receives.

    Used by tests to assert on console output.
    """

    def __init__(self):
        self.messages: List[str] = []

    def __call__(self, text: str) -> None:
        self.messages.append(text)

    def clear(self) -> None:
        self.messages.clear()
