"""Coolix IR Client - Primary interface for controlling an air conditioner.

This module provides CoolixRemote, a "virtual remote" that holds the AC state
and sends a full state packet through a transmitter on every change, the same
way the handheld remote does.

Example:
    async with connect_pigpio(gpio_pin=18) as transmitter:
        remote = CoolixRemote(transmitter)
        await remote.set_mode("heat")
        await remote.set_temperature(22)
        await remote.toggle_swing()
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import TYPE_CHECKING

from .protocol import (
    TEMP_MAX,
    TEMP_MIN,
    ACState,
    FanSpeed,
    Mode,
    OutOfRangeError,
    SpecialCommand,
    TimingBuffer,
    build_timing_sequence,
    encode_packet,
    format_packet,
)

if TYPE_CHECKING:
    from .transmit import Transmitter

_LOGGER = logging.getLogger(__name__)


def _as_mode(mode: Mode | str) -> Mode:
    if isinstance(mode, Mode):
        return mode
    try:
        return Mode(str(mode).lower())
    except ValueError:
        raise OutOfRangeError(
            f"Mode must be one of {', '.join(m.value for m in Mode)}, got {mode!r}"
        ) from None


def _as_fan(speed: FanSpeed | str) -> FanSpeed:
    if isinstance(speed, FanSpeed):
        return speed
    try:
        return FanSpeed(str(speed).lower())
    except ValueError:
        raise OutOfRangeError(
            f"Fan must be one of {', '.join(f.value for f in FanSpeed)}, got {speed!r}"
        ) from None


class CoolixRemote:
    """Virtual remote for Coolix/Midea-family air conditioners.

    Owns the AC state (mode, temperature, fan). Every successful setter
    encodes the candidate state, builds the timing sequence, commits the
    state and hands the sequence to the transmitter, exactly once. If
    encoding fails the stored state is left as it was.

    Toggle commands (LED, turbo, swing, power off) are sent from fixed
    templates and do not touch the stored state.

    The caller is responsible for the transmitter lifecycle - this class
    provides the protocol operations only.

    Args:
        transmitter: Object with an async transmit(sequence) method
        state: Initial state (defaults to COOL, 24°C, fan AUTO)
        reset_fan_on_auto: Controller policy. If True, switching into AUTO
            mode also resets the stored fan to AUTO. The packet is the same
            either way; this only changes what comes back when leaving AUTO.
    """

    def __init__(
        self,
        transmitter: "Transmitter",
        state: ACState | None = None,
        *,
        reset_fan_on_auto: bool = False,
    ) -> None:
        self._transmitter = transmitter
        self._state = state if state is not None else ACState()
        self._reset_fan_on_auto = reset_fan_on_auto
        self._lock = asyncio.Lock()
        self._buffer = TimingBuffer()
        self.last_packet: bytes | None = None

    @property
    def state(self) -> ACState:
        """Current AC state."""
        return self._state

    async def _send(self, command: ACState | SpecialCommand) -> bytes:
        # Caller holds the lock
        packet = encode_packet(command)
        sequence = build_timing_sequence(packet, self._buffer)
        if isinstance(command, ACState):
            self._state = command
        _LOGGER.debug("Sending %s: %s", command, format_packet(packet))
        self.last_packet = packet
        await self._transmitter.transmit(sequence.tolist())
        return packet

    async def send_state(self) -> ACState:
        """Re-send the current state without changing it.

        Returns:
            The state that was sent
        """
        async with self._lock:
            await self._send(self._state)
            return self._state

    async def set_temperature(self, celsius: int) -> ACState:
        """Set the target temperature.

        Args:
            celsius: Target temperature in °C (17-30)

        Returns:
            Updated ACState

        Raises:
            OutOfRangeError: If celsius is outside 17-30
        """
        if isinstance(celsius, bool) or not isinstance(celsius, int):
            raise OutOfRangeError(f"Temperature must be an integer, got {celsius!r}")
        if not TEMP_MIN <= celsius <= TEMP_MAX:
            raise OutOfRangeError(
                f"Temperature must be between {TEMP_MIN} and {TEMP_MAX}°C, got {celsius}"
            )
        async with self._lock:
            await self._send(replace(self._state, temperature=celsius))
            return self._state

    async def set_mode(self, mode: Mode | str) -> ACState:
        """Set the operating mode.

        Leaving AUTO never resets the fan: the selection stored before
        (or while) in AUTO takes effect again.

        Args:
            mode: Mode.COOL/AUTO/HEAT or "cool", "auto", "heat"

        Returns:
            Updated ACState

        Raises:
            OutOfRangeError: If mode is not supported
        """
        mode = _as_mode(mode)
        async with self._lock:
            candidate = replace(self._state, mode=mode)
            if (
                self._reset_fan_on_auto
                and mode == Mode.AUTO
                and self._state.mode != Mode.AUTO
            ):
                candidate = replace(candidate, fan=FanSpeed.AUTO)
            await self._send(candidate)
            return self._state

    async def set_fan(self, speed: FanSpeed | str) -> ACState:
        """Set the fan speed.

        Accepted in every mode. In AUTO mode the value is stored but the
        encoded packet still carries the AUTO-mode fan code.

        Args:
            speed: FanSpeed member or "auto", "low", "medium", "high"

        Returns:
            Updated ACState

        Raises:
            OutOfRangeError: If speed is not supported
        """
        speed = _as_fan(speed)
        async with self._lock:
            await self._send(replace(self._state, fan=speed))
            return self._state

    async def send_special(self, command: SpecialCommand) -> bytes:
        """Send a toggle command template.

        Returns:
            The packet that was sent
        """
        if not isinstance(command, SpecialCommand):
            raise OutOfRangeError(f"Unknown special command: {command!r}")
        async with self._lock:
            return await self._send(command)

    async def toggle_led(self) -> bytes:
        """Toggle the display LED."""
        return await self.send_special(SpecialCommand.LED)

    async def toggle_turbo(self) -> bytes:
        """Toggle turbo mode."""
        return await self.send_special(SpecialCommand.TURBO)

    async def toggle_swing(self) -> bytes:
        """Toggle louver swing."""
        return await self.send_special(SpecialCommand.SWING)

    async def power_off(self) -> bytes:
        """Turn the unit off. Any state command turns it back on."""
        return await self.send_special(SpecialCommand.POWER_OFF)
