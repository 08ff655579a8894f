"""Transmission helpers for sending timing sequences to an IR LED.

CoolixRemote only needs an object with an async ``transmit(sequence)`` method.
This module provides that interface plus a Raspberry Pi implementation that
drives a GPIO pin through the pigpio daemon.

Example:
    from coolix_ir import CoolixRemote
    from coolix_ir.transmit import connect_pigpio

    async with connect_pigpio(gpio_pin=18) as transmitter:
        remote = CoolixRemote(transmitter)
        await remote.set_temperature(22)
"""

from __future__ import annotations

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Protocol, Sequence

import pigpio

from .protocol import CARRIER_FREQUENCY

_LOGGER = logging.getLogger(__name__)

DEFAULT_GPIO_PIN = 18
DEFAULT_DUTY_CYCLE = 0.33
BUSY_POLL_INTERVAL = 0.002  # seconds


class Transmitter(Protocol):
    """Anything that can put a mark/space sequence on the air.

    Even indices are marks (modulated carrier), odd indices are spaces.
    The sequence already contains both frame repeats.
    """

    async def transmit(self, sequence: Sequence[int]) -> None: ...


class PigpioTransmitter:
    """Send timing sequences with pigpio waveforms.

    Marks are built as carrier cycles, spaces as a single idle pulse.
    Waveforms are created once per distinct duration and chained, which
    keeps the number of waves small (the protocol has only a handful of
    distinct durations).

    Args:
        pi: Connected pigpio.pi handle
        gpio_pin: BCM pin number of the IR LED
        carrier_hz: Carrier frequency for marks
        duty_cycle: Carrier on-fraction (0-1)
    """

    def __init__(
        self,
        pi: "pigpio.pi",
        gpio_pin: int = DEFAULT_GPIO_PIN,
        carrier_hz: int = CARRIER_FREQUENCY,
        duty_cycle: float = DEFAULT_DUTY_CYCLE,
    ) -> None:
        if not 0 < duty_cycle < 1:
            raise ValueError(f"Duty cycle must be between 0 and 1, got {duty_cycle}")
        self._pi = pi
        self.gpio_pin = gpio_pin
        self.carrier_hz = carrier_hz
        self.duty_cycle = duty_cycle

    def _carrier(self, duration: int) -> list["pigpio.pulse"]:
        cycle = int(1e6 / self.carrier_hz)
        on = int(cycle * self.duty_cycle)
        off = cycle - on
        mask = 1 << self.gpio_pin
        pulses = []
        for _ in range(duration // cycle):
            pulses.append(pigpio.pulse(mask, 0, on))
            pulses.append(pigpio.pulse(0, mask, off))
        return pulses

    def _create_wave(self, pulses: list["pigpio.pulse"]) -> int:
        self._pi.wave_add_generic(pulses)
        return self._pi.wave_create()

    def send(self, sequence: Sequence[int]) -> None:
        """Blocking send. Returns when the chain has finished."""
        marks: dict[int, int] = {}
        spaces: dict[int, int] = {}
        chain: list[int] = []

        self._pi.set_mode(self.gpio_pin, pigpio.OUTPUT)
        try:
            for i, duration in enumerate(sequence):
                if i % 2 == 0:
                    if duration not in marks:
                        marks[duration] = self._create_wave(self._carrier(duration))
                    chain.append(marks[duration])
                else:
                    if duration not in spaces:
                        spaces[duration] = self._create_wave(
                            [pigpio.pulse(0, 1 << self.gpio_pin, duration)]
                        )
                    chain.append(spaces[duration])

            _LOGGER.debug(
                "Chaining %d entries from %d waves on GPIO %d",
                len(chain), len(marks) + len(spaces), self.gpio_pin,
            )
            self._pi.wave_chain(chain)
            while self._pi.wave_tx_busy():
                time.sleep(BUSY_POLL_INTERVAL)
        finally:
            for wid in (*marks.values(), *spaces.values()):
                self._pi.wave_delete(wid)

    async def transmit(self, sequence: Sequence[int]) -> None:
        """Send without blocking the event loop."""
        await asyncio.to_thread(self.send, list(sequence))


@asynccontextmanager
async def connect_pigpio(
    host: str | None = None,
    port: int | None = None,
    gpio_pin: int = DEFAULT_GPIO_PIN,
    duty_cycle: float = DEFAULT_DUTY_CYCLE,
) -> AsyncIterator[PigpioTransmitter]:
    """Connect to a pigpio daemon and yield a transmitter.

    Host and port default to pigpio's own PIGPIO_ADDR / PIGPIO_PORT
    environment variables (localhost:8888 if unset).

    Args:
        host: pigpio daemon hostname or IP
        port: pigpio daemon port
        gpio_pin: BCM pin number of the IR LED
        duty_cycle: Carrier on-fraction

    Yields:
        PigpioTransmitter bound to the connection

    Raises:
        ConnectionError: If the daemon cannot be reached
    """
    kwargs: dict[str, object] = {}
    if host is not None:
        kwargs["host"] = host
    if port is not None:
        kwargs["port"] = port
    pi = pigpio.pi(**kwargs)
    if not pi.connected:
        raise ConnectionError(
            "Could not connect to pigpio daemon. Is pigpiod running?"
        )
    _LOGGER.debug("Connected to pigpio daemon, IR LED on GPIO %d", gpio_pin)
    try:
        yield PigpioTransmitter(pi, gpio_pin=gpio_pin, duty_cycle=duty_cycle)
    finally:
        pi.stop()
