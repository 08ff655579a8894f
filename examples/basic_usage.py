#!/usr/bin/env python3
"""Basic usage example for coolix-ir.

This example shows how to:
1. Encode a state packet and look at its bytes
2. Connect to a pigpio daemon
3. Change mode, temperature and fan through the virtual remote
4. Send a toggle command

Requirements:
    pip install coolix-ir
    sudo pigpiod

Usage:
    python basic_usage.py [GPIO_PIN]

Without a pin, only prints the packets that would be sent.
"""

import asyncio
import logging
import sys

from coolix_ir import (
    ACState,
    CoolixRemote,
    FanSpeed,
    Mode,
    SpecialCommand,
    build_timing_sequence,
    encode_special,
    encode_state,
    format_packet,
)
from coolix_ir.transmit import connect_pigpio


async def main(gpio_pin: int | None = None):
    state = ACState(Mode.HEAT, 22, FanSpeed.LOW)
    packet = encode_state(state)
    print(f"{state}\n  packet: {format_packet(packet)}")
    print(f"  timing: {len(build_timing_sequence(packet))} entries")
    print(f"LED toggle\n  packet: {format_packet(encode_special(SpecialCommand.LED))}")

    if gpio_pin is None:
        return

    async with connect_pigpio(gpio_pin=gpio_pin) as transmitter:
        remote = CoolixRemote(transmitter)

        await remote.set_mode("heat")
        await remote.set_temperature(22)
        await remote.set_fan("low")
        print(f"\nRemote state: {remote.state}")

        # Example: turn the unit off (commented out for safety)
        # await remote.power_off()


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    pin = int(sys.argv[1]) if len(sys.argv) > 1 else None
    asyncio.run(main(pin))
