#!/usr/bin/env python3
"""
End-to-end tests against a real IR LED driven by pigpio.

These tests need a running pigpio daemon and an IR LED on a GPIO pin. They
cannot check that the air conditioner reacted; point the LED at the unit
(or at a phone camera) and watch.

These tests are SKIPPED by default. To run them:

    # LED on GPIO 18, local pigpiod
    pytest -m e2e -v --gpio-pin 18

    # Remote Raspberry Pi
    pytest -m e2e -v --gpio-pin 18 --pigpio-host raspberrypi.local

    # Run directly (not via pytest)
    GPIO_PIN=18 python tests/test_e2e.py
"""

import asyncio
import os
import sys

import pytest

from coolix_ir import CoolixRemote, FanSpeed, Mode
from coolix_ir.transmit import connect_pigpio

# Pause between commands so the unit beeps for each one
COMMAND_DELAY = float(os.environ.get("COOLIX_COMMAND_DELAY", "1.0"))


def _require_pin(gpio_pin: int | None) -> int:
    if gpio_pin is None:
        pytest.skip("No IR LED configured (use --gpio-pin or GPIO_PIN)")
    return gpio_pin


# E2E Tests - require real hardware, skipped by default
# Run with: pytest -m e2e
@pytest.mark.e2e
class TestTransmission:
    """Send real commands through the LED."""

    @pytest.mark.asyncio
    async def test_send_state(self, gpio_pin: int | None, pigpio_host: str | None) -> None:
        """Test that a state packet goes out without errors."""
        pin = _require_pin(gpio_pin)
        async with connect_pigpio(host=pigpio_host, gpio_pin=pin) as transmitter:
            remote = CoolixRemote(transmitter)
            state = await remote.send_state()
            print(f"Sent {state}")

    @pytest.mark.asyncio
    async def test_mode_and_fan_sequence(
        self, gpio_pin: int | None, pigpio_host: str | None
    ) -> None:
        """Walk through modes and fans, ending in Cool/24/Auto."""
        pin = _require_pin(gpio_pin)
        async with connect_pigpio(host=pigpio_host, gpio_pin=pin) as transmitter:
            remote = CoolixRemote(transmitter)
            await remote.set_mode(Mode.HEAT)
            await asyncio.sleep(COMMAND_DELAY)
            await remote.set_fan(FanSpeed.HIGH)
            await asyncio.sleep(COMMAND_DELAY)
            await remote.set_mode(Mode.AUTO)
            await asyncio.sleep(COMMAND_DELAY)
            await remote.set_mode(Mode.COOL)
            await asyncio.sleep(COMMAND_DELAY)
            await remote.set_fan(FanSpeed.AUTO)
            assert remote.state.temperature == 24

    @pytest.mark.asyncio
    async def test_led_toggle_twice(self, gpio_pin: int | None, pigpio_host: str | None) -> None:
        """Toggle the display LED off and back on."""
        pin = _require_pin(gpio_pin)
        async with connect_pigpio(host=pigpio_host, gpio_pin=pin) as transmitter:
            remote = CoolixRemote(transmitter)
            await remote.toggle_led()
            await asyncio.sleep(COMMAND_DELAY)
            await remote.toggle_led()


async def main(gpio_pin: int, host: str | None = None) -> None:
    async with connect_pigpio(host=host, gpio_pin=gpio_pin) as transmitter:
        remote = CoolixRemote(transmitter)
        print(f"Sending {remote.state} on GPIO {gpio_pin}...")
        await remote.send_state()
        print("Done.")


if __name__ == "__main__":
    pin = os.environ.get("GPIO_PIN") or (sys.argv[1] if len(sys.argv) > 1 else None)
    if not pin:
        print("Usage: GPIO_PIN=18 python tests/test_e2e.py")
        sys.exit(1)
    asyncio.run(main(int(pin), os.environ.get("PIGPIO_ADDR")))
