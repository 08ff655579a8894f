"""Coolix IR - Infrared remote encoder for Coolix/Midea-family air conditioners.

This library turns air conditioner settings (mode, temperature, fan) and
toggle commands (LED, turbo, swing, power off) into the 6-byte "4D B2"
packets used by these remotes, and expands them into the mark/space timing
sequence an IR LED driver needs.

Supported modes: Cool, Auto, Heat. Dry and Fan-only are not supported.

Basic Usage:
    from coolix_ir import CoolixRemote
    from coolix_ir.transmit import connect_pigpio

    async with connect_pigpio(gpio_pin=18) as transmitter:
        remote = CoolixRemote(transmitter)
        await remote.set_mode("cool")
        await remote.set_temperature(23)
        await remote.set_fan("high")

Packets only (no hardware):
    from coolix_ir import ACState, Mode, FanSpeed, encode_state, build_timing_sequence

    packet = encode_state(ACState(Mode.HEAT, 30, FanSpeed.LOW))
    sequence = build_timing_sequence(packet)
"""

from __future__ import annotations

from .client import CoolixRemote
from .protocol import (
    # Constants
    AUTO_MODE_FAN_CODE,
    CARRIER_FREQUENCY,
    FAN_CODES,
    MODE_CODES,
    PACKET_SIZE,
    TEMP_MAX,
    TEMP_MIN,
    TEMPERATURE_CODES,
    TIMING_BUFFER_CAPACITY,
    TIMING_SEQUENCE_LENGTH,
    Timing,
    # Data classes / enums
    ACState,
    FanSpeed,
    Mode,
    SpecialCommand,
    TimingBuffer,
    # Errors
    CapacityExceededError,
    CoolixError,
    OutOfRangeError,
    # Functions
    build_timing_sequence,
    calc_checksum,
    encode_packet,
    encode_special,
    encode_state,
    fan_code,
    format_packet,
    mode_code,
    temperature_code,
    verify_checksum,
    verify_packet,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Primary interface
    "CoolixRemote",
    # Data classes / enums
    "ACState",
    "FanSpeed",
    "Mode",
    "SpecialCommand",
    "TimingBuffer",
    # Errors
    "CapacityExceededError",
    "CoolixError",
    "OutOfRangeError",
    # Constants
    "AUTO_MODE_FAN_CODE",
    "CARRIER_FREQUENCY",
    "FAN_CODES",
    "MODE_CODES",
    "PACKET_SIZE",
    "TEMP_MAX",
    "TEMP_MIN",
    "TEMPERATURE_CODES",
    "TIMING_BUFFER_CAPACITY",
    "TIMING_SEQUENCE_LENGTH",
    "Timing",
    # Protocol functions (for advanced use)
    "build_timing_sequence",
    "calc_checksum",
    "encode_packet",
    "encode_special",
    "encode_state",
    "fan_code",
    "format_packet",
    "mode_code",
    "temperature_code",
    "verify_checksum",
    "verify_packet",
]
