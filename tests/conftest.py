"""Pytest configuration for Coolix IR tests."""

import os
from pathlib import Path

import pytest


def _load_dotenv() -> None:
    """Load .env file if it exists."""
    env_path = Path(__file__).parent.parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    os.environ.setdefault(key.strip(), value.strip())


# Load .env at import time
_load_dotenv()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add custom command-line options for E2E tests."""
    parser.addoption(
        "--gpio-pin",
        action="store",
        default=None,
        help="BCM GPIO pin the IR LED is wired to (e.g., 18)",
    )
    parser.addoption(
        "--pigpio-host",
        action="store",
        default=None,
        help="pigpio daemon hostname/IP for remote GPIO access",
    )


@pytest.fixture
def gpio_pin(request: pytest.FixtureRequest) -> int | None:
    """Fixture providing the IR LED pin from CLI, env, or None."""
    value = request.config.getoption("--gpio-pin") or os.environ.get("GPIO_PIN")
    return int(value) if value else None


@pytest.fixture
def pigpio_host(request: pytest.FixtureRequest) -> str | None:
    """Fixture providing the pigpio daemon host from CLI or env."""
    return request.config.getoption("--pigpio-host") or os.environ.get("PIGPIO_ADDR")
