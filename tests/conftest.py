"""
Test Configuration and Fixtures

Shared pytest fixtures for hardware, core and service tests.

To use pytest:
    pip install -e ".[test]"
    pytest tests/
"""

import pytest

from core.messages import MessageRecorder
from core.state_machine import ConfigModeStateMachine
from hardware.controllers.config_button import ConfigButton
from hardware.controllers.status_led import StatusLED
from hardware.implementations.mock_gpio import MockGPIO

BUTTON_PIN = 17
LED_PIN = 27


# =============================================================================
# GPIO FIXTURES
# =============================================================================

@pytest.fixture
def mock_gpio():
    """
    Provide a fresh MockGPIO instance for each test.

    Usage in test:
        def test_something(mock_gpio):
            mock_gpio.setup_output(27)
    """
    gpio = MockGPIO()
    yield gpio
    gpio.cleanup()


@pytest.fixture
def config_button(mock_gpio):
    """ConfigButton on BUTTON_PIN, released (pulled HIGH)"""
    return ConfigButton(mock_gpio, BUTTON_PIN)


@pytest.fixture
def status_led(mock_gpio):
    """StatusLED on LED_PIN, starting LOW"""
    return StatusLED(mock_gpio, LED_PIN)


# =============================================================================
# CORE FIXTURES
# =============================================================================

@pytest.fixture
def message_recorder():
    """Collects every console message text"""
    return MessageRecorder()


@pytest.fixture
def machine(config_button, status_led, message_recorder):
    """
    State machine with both pins wired.

    Usage:
        def test_press(machine, mock_gpio):
            mock_gpio.set_input_level(BUTTON_PIN, PinState.LOW)
            machine.tick()
    """
    return ConfigModeStateMachine(config_button, status_led, message_recorder)


@pytest.fixture
def fake_sleep():
    """
    Sleep replacement that records requested delays instead of sleeping.

    Usage:
        driver = TickDriver(machine, sleep=fake_sleep)
        driver.run(max_ticks=3)
        assert fake_sleep.calls == [1.0, 1.0, 1.0]
    """
    class FakeSleep:
        def __init__(self):
            self.calls = []

        def __call__(self, seconds):
            self.calls.append(seconds)

    return FakeSleep()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """
    Configure pytest with custom markers.

        pytest -m unit          # Only unit tests
        pytest -m integration   # Only integration tests
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (may be slower)")
    config.addinivalue_line("markers", "hardware: Tests requiring real hardware")
