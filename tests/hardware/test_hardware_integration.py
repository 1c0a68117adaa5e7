"""
Hardware Module Integration Tests

Tests cover:
1. MockGPIO behaves like a pin driver (and scripts button levels)
2. ConfigButton / StatusLED map levels correctly
3. Factory creates correct implementations
"""

import pytest

from hardware.controllers.config_button import ConfigButton
from hardware.controllers.status_led import StatusLED
from hardware.factory import HardwareFactory, create_gpio
from hardware.implementations.mock_gpio import MockGPIO
from hardware.interfaces.gpio_interface import GPIOError, PinState, PullMode
from hardware.utils import format_pin, read_pin_level, safe_gpio_cleanup


class TestMockGPIO:
    """Test the simulated pin driver"""

    def test_input_rests_at_pull_level(self, mock_gpio):
        mock_gpio.setup_input(17, pull_mode=PullMode.UP)
        mock_gpio.setup_input(18, pull_mode=PullMode.DOWN)

        assert mock_gpio.read(17) == PinState.HIGH
        assert mock_gpio.read(18) == PinState.LOW

    def test_output_starts_low_and_records_writes(self, mock_gpio):
        mock_gpio.setup_output(27)
        assert mock_gpio.get_pin_state(27) == PinState.LOW

        mock_gpio.write(27, PinState.HIGH)
        mock_gpio.write(27, PinState.LOW)

        assert mock_gpio.writes_to(27) == [PinState.HIGH, PinState.LOW]

    def test_queued_levels_consumed_one_per_read(self, mock_gpio):
        mock_gpio.setup_input(17)
        mock_gpio.queue_input_levels(17, [PinState.LOW, PinState.HIGH, PinState.LOW])

        reads = [mock_gpio.read(17) for _ in range(5)]

        # Last queued level sticks once the queue is empty
        assert reads == [
            PinState.LOW,
            PinState.HIGH,
            PinState.LOW,
            PinState.LOW,
            PinState.LOW,
        ]

    def test_set_input_level_discards_queue(self, mock_gpio):
        mock_gpio.setup_input(17)
        mock_gpio.queue_input_levels(17, [PinState.LOW, PinState.LOW])
        mock_gpio.set_input_level(17, PinState.HIGH)

        assert mock_gpio.read(17) == PinState.HIGH
        assert mock_gpio.get_pin_info(17)['queued_levels'] == 0

    def test_unconfigured_pin_raises(self, mock_gpio):
        with pytest.raises(GPIOError):
            mock_gpio.read(5)
        with pytest.raises(GPIOError):
            mock_gpio.write(5, PinState.HIGH)

    def test_write_to_input_raises(self, mock_gpio):
        mock_gpio.setup_input(17)
        with pytest.raises(GPIOError):
            mock_gpio.write(17, PinState.HIGH)

    def test_scripting_output_pin_raises(self, mock_gpio):
        mock_gpio.setup_output(27)
        with pytest.raises(GPIOError):
            mock_gpio.set_input_level(27, PinState.LOW)

    def test_cleanup_specific_pins(self, mock_gpio):
        mock_gpio.setup_input(17)
        mock_gpio.setup_output(27)

        mock_gpio.cleanup([17])

        with pytest.raises(GPIOError):
            mock_gpio.read(17)
        assert mock_gpio.get_pin_state(27) == PinState.LOW


class TestConfigButton:
    """Test active-low button reads"""

    def test_button_configures_pull_up_input(self, mock_gpio):
        button = ConfigButton(mock_gpio, 17)

        info = mock_gpio.get_pin_info(17)
        assert info['mode'] == 'input'
        assert info['pull'] == PullMode.UP
        assert button.pin == 17

    def test_released_button(self, config_button):
        assert config_button.read_level() == 1
        assert config_button.is_pressed() is False

    def test_pressed_button_reads_low(self, config_button, mock_gpio):
        mock_gpio.set_input_level(17, PinState.LOW)

        assert config_button.read_level() == 0
        assert config_button.is_pressed() is True

    def test_cleanup_is_idempotent(self, mock_gpio):
        button = ConfigButton(mock_gpio, 17)
        button.cleanup()
        button.cleanup()

        with pytest.raises(GPIOError):
            mock_gpio.read(17)

    def test_context_manager_releases_pin(self, mock_gpio):
        with ConfigButton(mock_gpio, 17) as button:
            assert button.read_level() == 1

        with pytest.raises(GPIOError):
            mock_gpio.read(17)


class TestStatusLED:
    """Test LED output levels"""

    def test_write_levels(self, status_led, mock_gpio):
        status_led.write_level(1)
        assert mock_gpio.get_pin_state(27) == PinState.HIGH
        assert status_led.level == 1

        status_led.off()
        assert mock_gpio.get_pin_state(27) == PinState.LOW
        assert status_led.level == 0

    def test_cleanup_turns_led_off_first(self, status_led, mock_gpio):
        status_led.write_level(1)
        status_led.cleanup()

        assert mock_gpio.writes_to(27) == [PinState.HIGH, PinState.LOW]
        with pytest.raises(GPIOError):
            mock_gpio.get_pin_state(27)

    def test_get_status(self, status_led):
        status = status_led.get_status()

        assert status['pin'] == 27
        assert status['level'] is None
        assert status['gpio_available'] is True


class TestFactory:
    """Test hardware factory"""

    def test_factory_creates_mock_gpio(self):
        gpio = HardwareFactory.create_gpio(mode="mock")
        assert isinstance(gpio, MockGPIO)

    def test_create_gpio_force_mock(self):
        assert isinstance(create_gpio(force_mock=True), MockGPIO)

    def test_factory_rejects_unknown_mode(self):
        with pytest.raises(ValueError):
            HardwareFactory.create_gpio(mode="bogus")

    def test_real_mode_without_driver_raises(self, monkeypatch):
        def no_driver():
            raise GPIOError("RPi.GPIO library not available")

        monkeypatch.setattr("hardware.factory.RaspberryPiGPIO", no_driver)

        with pytest.raises(RuntimeError):
            HardwareFactory.create_gpio(mode="real")

    def test_auto_mode_falls_back_to_mock(self, monkeypatch):
        def no_driver():
            raise GPIOError("RPi.GPIO library not available")

        monkeypatch.setattr("hardware.factory.RaspberryPiGPIO", no_driver)

        assert isinstance(HardwareFactory.create_gpio(mode="auto"), MockGPIO)

    def test_auto_mode_returns_working_gpio(self):
        # Real GPIO on a Pi, mock fallback everywhere else
        gpio = HardwareFactory.create_gpio(mode="auto")
        assert gpio.is_available() is True
        gpio.cleanup()


class TestUtils:
    """Test shared GPIO helpers"""

    def test_read_pin_level(self, mock_gpio):
        mock_gpio.setup_input(17)
        assert read_pin_level(mock_gpio, 17) == 1

    def test_format_pin(self):
        assert format_pin(17) == "17"
        assert format_pin(0) == "0"
        assert format_pin(None) == "disabled"

    def test_safe_cleanup_swallows_errors(self):
        class BrokenGPIO(MockGPIO):
            def cleanup(self, pins=None):
                raise GPIOError("boom")

        safe_gpio_cleanup(BrokenGPIO(), [17])
        safe_gpio_cleanup(None)
