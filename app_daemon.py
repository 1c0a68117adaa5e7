"""
App Daemon

Service entry point for the config-mode button.

Architecture:
- One GPIO backend (real or mock, picked by HardwareFactory)
- Optional config button and status LED, each on its own pin
- ConfigModeStateMachine decides what to do each tick
- TickDriver calls it once per second until SIGINT/SIGTERM

Remote Control:
- The companion process tells the daemon about connections by writing a
  command to CONTROL_FILE, e.g. echo CONNECTED > /tmp/appdaemon_control.cmd
- Commands: CONNECTED, WAIT_CONNECT, IDLE, STATUS

Usage:
    python app_daemon.py --config-gpio=17 --led-gpio=27
"""

import argparse
import logging
import logging.handlers
import signal
import sys
from pathlib import Path
from typing import Callable, List, Optional

from config.settings import (
    CONFIG_GPIO_PIN,
    CONNECT_TIMEOUT,
    CONTROL_FILE,
    GPIO_MODE,
    LED_GPIO_PIN,
    LOG_BACKUP_COUNT,
    LOG_DIR,
    LOG_FALLBACK_DIR,
    LOG_SERVICE_FILE,
    TICK_INTERVAL,
)
from core.messages import MESSAGE_LOGGER, ConsoleMessageSink, MessageSink
from core.state_machine import ConfigModeStateMachine, Phase
from core.tick_driver import TickDriver
from hardware import ConfigButton, HardwareFactory, StatusLED
from hardware.factory import HARDWARE_MODES
from hardware.interfaces.gpio_interface import GPIOInterface
from hardware.utils import format_pin, safe_gpio_cleanup

# Remote commands that map straight onto a phase request
PHASE_COMMANDS = {phase.value: phase for phase in Phase}


class AppDaemonService:
    """
    Wires GPIO, pin controllers, state machine and tick loop together.

    Pin acquisition happens in __init__: a GPIOError there is fatal and
    propagates to main().

    Usage:
        service = AppDaemonService(config_pin=17, led_pin=27)
        service.run()  # Blocks until shutdown
    """

    def __init__(
        self,
        config_pin: Optional[int],
        led_pin: Optional[int],
        gpio: Optional[GPIOInterface] = None,
        gpio_mode: str = GPIO_MODE,
        tick_interval: float = TICK_INTERVAL,
        connect_timeout: int = CONNECT_TIMEOUT,
        control_file: Optional[str] = CONTROL_FILE,
        message_sink: Optional[MessageSink] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.message = message_sink or ConsoleMessageSink()
        self.config_pin = config_pin
        self.led_pin = led_pin
        self.control_file = Path(control_file) if control_file else None

        self.message("Starting")
        self.message(f"Config GPIO: {format_pin(config_pin)}")
        self.message(f"LED GPIO: {format_pin(led_pin)}")

        self.gpio = gpio or HardwareFactory.create_gpio(mode=gpio_mode)

        self.button: Optional[ConfigButton] = None
        self.led: Optional[StatusLED] = None
        try:
            if config_pin is not None:
                self.button = ConfigButton(self.gpio, config_pin)
            if led_pin is not None:
                self.led = StatusLED(self.gpio, led_pin)
            if self.button is not None:
                self.message(f"Config button level: {self.button.read_level()}")
        except Exception:
            self.cleanup()
            raise

        self.machine = ConfigModeStateMachine(
            self.button,
            self.led,
            self.message,
            connect_timeout=connect_timeout,
        )

        driver_kwargs = {"interval": tick_interval, "before_tick": self._check_control_commands}
        if sleep is not None:
            driver_kwargs["sleep"] = sleep
        self.driver = TickDriver(self.machine, **driver_kwargs)

        self._cleaned_up = False
        self.logger.info("App daemon initialized")

    def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Run the tick loop until stop() or a fatal error.

        Hardware is always released on the way out.

        Returns:
            Number of ticks performed
        """
        self.machine.start()
        try:
            return self.driver.run(max_ticks=max_ticks)
        finally:
            self.cleanup()

    def stop(self) -> None:
        self.driver.stop()

    def install_signal_handlers(self) -> None:
        """Stop the loop on SIGTERM/SIGINT (main thread only)"""
        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

    def _signal_handler(self, signum, _frame):
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            _frame: Current stack frame (unused, required by signal API)
        """
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received signal {signal_name}, shutting down...")
        self.stop()

    # =========================================================================
    # REMOTE CONTROL
    # =========================================================================

    def _check_control_commands(self) -> None:
        """
        Check for and process a command from the companion process.

        The file is deleted right after reading so each command runs once.
        A broken control file never stops the tick loop.
        """
        if self.control_file is None or not self.control_file.exists():
            return

        try:
            command = self.control_file.read_text(encoding="utf-8").strip().upper()
            self.control_file.unlink()
        except Exception as e:
            # Unreadable or undecodable file: drop it so it is not retried forever
            self.logger.error(f"Failed to read control command: {e}")
            try:
                self.control_file.unlink(missing_ok=True)
            except OSError as cleanup_error:
                self.logger.debug(f"Control file cleanup failed: {cleanup_error}")
            return

        self.logger.info(f"Remote command received: {command}")
        self.process_remote_command(command)

    def process_remote_command(self, command: str) -> None:
        """
        Dispatch one remote command.

        Args:
            command: CONNECTED, WAIT_CONNECT, IDLE or STATUS
        """
        phase = PHASE_COMMANDS.get(command)
        if phase is not None:
            self.machine.request_phase(phase)
        elif command == "STATUS":
            status = self.machine.get_status_info()
            self.logger.info(
                f"Remote STATUS → phase: {status['phase']}, "
                f"timer: {status['connect_timer']}, "
                f"ticks: {status['tick_count']}",
            )
        else:
            self.logger.warning(f"Unknown remote command: {command}")

    # =========================================================================
    # SHUTDOWN
    # =========================================================================

    def cleanup(self) -> None:
        """
        Turn the LED off and release all pins.

        Safe to call multiple times - idempotent.
        """
        if getattr(self, "_cleaned_up", False):
            return

        self.logger.info("Cleaning up hardware...")
        if self.led is not None:
            self.led.cleanup()
        if self.button is not None:
            self.button.cleanup()
        safe_gpio_cleanup(self.gpio, logger=self.logger)
        self._cleaned_up = True


def pin_argument(value: str) -> Optional[int]:
    """argparse type for pin numbers: negative means disabled"""
    try:
        pin = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid pin number: {value}") from e
    return pin if pin >= 0 else None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Config-mode button and status LED daemon",
    )
    parser.add_argument(
        "--config-gpio",
        type=pin_argument,
        default=CONFIG_GPIO_PIN,
        help="BCM pin of the config button (omit or negative to disable)",
    )
    parser.add_argument(
        "--led-gpio",
        type=pin_argument,
        default=LED_GPIO_PIN,
        help="BCM pin of the status LED (omit or negative to disable)",
    )
    parser.add_argument(
        "--gpio-mode",
        choices=HARDWARE_MODES,
        default=GPIO_MODE,
        help="GPIO backend (default: %(default)s)",
    )
    parser.add_argument(
        "--tick-interval",
        type=float,
        default=TICK_INTERVAL,
        help="Seconds between state machine ticks (default: %(default)s)",
    )
    parser.add_argument(
        "--control-file",
        default=CONTROL_FILE,
        help="Remote control command file (default: %(default)s)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Diagnostic log level; \"**** AppDaemon:\" messages are always shown",
    )
    return parser


def setup_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Setup logging with rotation.

    Logs to both console and file:
    - Console shows the bare message so "**** AppDaemon:" lines read as-is
    - File rotates daily, keeps LOG_BACKUP_COUNT days

    `level` filters diagnostic logging only. Console messages always stay
    at INFO, so they are never hidden by a quieter level.
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    # Handlers carry no level of their own: filtering happens on the loggers
    logging.getLogger(MESSAGE_LOGGER).setLevel(logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    file_format = logging.Formatter("%(asctime)s %(levelname)s %(message)s | %(name)s")

    log_file = Path(log_dir or LOG_DIR) / LOG_SERVICE_FILE
    try:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            log_file,
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except (PermissionError, FileNotFoundError):
        # Fallback to local logs directory if LOG_DIR not writable
        logs_dir = Path(LOG_FALLBACK_DIR)
        logs_dir.mkdir(exist_ok=True)

        fallback_log = logs_dir / LOG_SERVICE_FILE
        logger.warning(f"Cannot write to {log_file}, using fallback: {fallback_log}")

        file_handler = logging.handlers.TimedRotatingFileHandler(
            fallback_log,
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )

    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the daemon.

    Parses arguments, sets up logging and runs the service until a signal.
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    logger = logging.getLogger(__name__)

    try:
        service = AppDaemonService(
            config_pin=args.config_gpio,
            led_pin=args.led_gpio,
            gpio_mode=args.gpio_mode,
            tick_interval=args.tick_interval,
            control_file=args.control_file,
        )
        service.install_signal_handlers()
        service.run()
    except Exception as e:
        logger.critical(f"Fatal error in main: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
