"""Coolix IR Protocol - Packet building, validation and timing expansion.

This module contains the protocol used by Coolix/Midea-family air conditioner
remotes (the "4D B2" family). It is transmit-only: logical AC state goes in,
a pulse-distance timing sequence comes out.

Protocol overview:
- Every command is a 6-byte packet, sent LSB first, twice per key press
- State packets start with header bytes 0x4D 0xB2
- Byte 2 carries the fan code, byte 3 is its bitwise complement
- Byte 4 packs mode (high nibble) and temperature (low nibble, Gray-like table)
- Byte 5 is a checksum: (0xFD - sum(bytes 0-4)) & 0xFF

Packet layout (state):
    4D B2 <fan> <~fan> <mode<<4 | temp> <checksum>

Packet layout (special/toggle commands):
    <headerA> <headerB> <fixed> <fixed> <command id> <checksum>

Since 0x4D + 0xB2 == 0xFF and fan + ~fan == 0xFF, the checksum of a state
packet always ends up as the complement of byte 4.

Physical layer (38 kHz carrier, durations in microseconds):
    header mark 4350, header space 4400
    bit mark 560, one space 1690, zero space 560
    trailing mark 560, frame gap 5200 (between the two repeats only)
"""

from __future__ import annotations

from array import array
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator

# =============================================================================
# Errors
# =============================================================================


class CoolixError(Exception):
    """Base class for all coolix_ir errors."""


class OutOfRangeError(CoolixError, ValueError):
    """Raised when a value has no encoding (temperature, mode, fan, duration)."""


class CapacityExceededError(CoolixError):
    """Raised when a timing buffer cannot hold the full sequence."""


# =============================================================================
# Protocol Constants
# =============================================================================

PACKET_SIZE = 6
PAYLOAD_SIZE = 5  # Bytes covered by the checksum
STATE_HEADER = b"\x4d\xb2"
CHECKSUM_BASE = 0xFD

TEMP_MIN = 17
TEMP_MAX = 30
DEFAULT_TEMPERATURE = 24


class Mode(Enum):
    """Operating modes with a known encoding."""

    COOL = "cool"
    AUTO = "auto"
    HEAT = "heat"


class FanSpeed(Enum):
    """Fan selections offered by the remote."""

    AUTO = "auto"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PacketOffset:
    """Byte offsets in a 6-byte packet."""

    HEADER_A = 0
    HEADER_B = 1
    FAN = 2
    FAN_INVERTED = 3
    MODE_TEMP = 4
    CHECKSUM = 5


class Timing:
    """Nominal physical layer durations in microseconds.

    These are emitted exactly. Receiver tolerances (roughly +/-150-200 us)
    are not applied on the transmit side.
    """

    HEADER_MARK = 4350
    HEADER_SPACE = 4400
    BIT_MARK = 560
    ONE_SPACE = 1690
    ZERO_SPACE = 560
    FRAME_GAP = 5200


CARRIER_FREQUENCY = 38000  # Hz
FRAME_REPEATS = 2

# header pair + 48 bit pairs + trailing mark
FRAME_LENGTH = 2 + PACKET_SIZE * 8 * 2 + 1
# Two frames plus the single gap between them
TIMING_SEQUENCE_LENGTH = FRAME_REPEATS * FRAME_LENGTH + (FRAME_REPEATS - 1)
# Default allocation for timing buffers, leaves headroom over the sequence length
TIMING_BUFFER_CAPACITY = 204
MAX_DURATION = 0xFFFF

# =============================================================================
# Lookup Tables
# =============================================================================

# Low nibble of byte 4, indexed by celsius - TEMP_MIN. Not a linear offset.
TEMPERATURE_CODES: tuple[int, ...] = (
    0x0,  # 17C
    0x8,  # 18C
    0xC,  # 19C
    0x4,  # 20C
    0x6,  # 21C
    0xE,  # 22C
    0xA,  # 23C
    0x2,  # 24C
    0x3,  # 25C
    0xB,  # 26C
    0x9,  # 27C
    0x1,  # 28C
    0x5,  # 29C
    0xD,  # 30C
)

FAN_CODES: dict[FanSpeed, int] = {
    FanSpeed.AUTO: 0xFD,
    FanSpeed.LOW: 0xF9,
    FanSpeed.MEDIUM: 0xFA,
    FanSpeed.HIGH: 0xFC,
}

# Not a fan selection: replaces the fan byte whenever mode is AUTO
AUTO_MODE_FAN_CODE = 0xF8

# High nibble of byte 4
MODE_CODES: dict[Mode, int] = {
    Mode.COOL: 0x0,
    Mode.AUTO: 0x1,
    Mode.HEAT: 0x3,
}


def temperature_code(celsius: int) -> int:
    """Look up the 4-bit code for a setpoint.

    Args:
        celsius: Setpoint in degrees C (17-30)

    Returns:
        Temperature nibble for byte 4

    Raises:
        OutOfRangeError: If celsius is outside 17-30
    """
    if isinstance(celsius, bool) or not isinstance(celsius, int):
        raise OutOfRangeError(f"Temperature must be an integer, got {celsius!r}")
    if not TEMP_MIN <= celsius <= TEMP_MAX:
        raise OutOfRangeError(
            f"Temperature must be between {TEMP_MIN} and {TEMP_MAX}°C, got {celsius}"
        )
    return TEMPERATURE_CODES[celsius - TEMP_MIN]


def fan_code(speed: FanSpeed) -> int:
    """Look up the fan byte for a fan selection."""
    try:
        return FAN_CODES[speed]
    except (KeyError, TypeError):
        raise OutOfRangeError(f"No fan code for {speed!r}") from None


def mode_code(mode: Mode) -> int:
    """Look up the 4-bit mode code."""
    try:
        return MODE_CODES[mode]
    except (KeyError, TypeError):
        raise OutOfRangeError(f"No mode code for {mode!r}") from None


# =============================================================================
# Commands
# =============================================================================


@dataclass(frozen=True)
class ACState:
    """Logical state of the virtual remote.

    The fan selection is kept even in AUTO mode, where it has no effect on
    the encoded packet, so that it comes back when the mode changes again.
    """

    mode: Mode = Mode.COOL
    temperature: int = DEFAULT_TEMPERATURE
    fan: FanSpeed = FanSpeed.AUTO


class SpecialCommand(Enum):
    """Toggle-style commands sent as fixed 5-byte templates.

    These carry no AC state. The receiving unit flips the feature on each press.
    """

    LED = b"\xad\x52\xaf\x50\xa5"
    TURBO = b"\xad\x52\xaf\x50\x45"
    SWING = b"\x4d\xb2\xd6\x29\x07"
    POWER_OFF = b"\x4d\xb2\xde\x21\x07"

    @property
    def template(self) -> bytes:
        return self.value


# =============================================================================
# Checksum & Packet Encoding
# =============================================================================


def calc_checksum(data: bytes) -> int:
    """Calculate the packet checksum.

    Args:
        data: Packet bytes; only the first five are summed

    Returns:
        Single byte checksum, (0xFD - sum) modulo 256
    """
    return (CHECKSUM_BASE - sum(data[:PAYLOAD_SIZE])) & 0xFF


def verify_checksum(packet: bytes) -> bool:
    """Verify packet checksum.

    Args:
        packet: Complete 6-byte packet

    Returns:
        True if checksum is valid
    """
    if len(packet) != PACKET_SIZE:
        return False
    return packet[PacketOffset.CHECKSUM] == calc_checksum(packet)


def verify_packet(packet: bytes) -> bool:
    """Verify checksum and the inverted fan byte of state-family packets.

    Packets sharing the 4D B2 header (state, swing, power off) carry the
    complement of byte 2 in byte 3. The receiver rejects them otherwise.
    """
    if not verify_checksum(packet):
        return False
    if packet[:2] == STATE_HEADER:
        return packet[PacketOffset.FAN_INVERTED] == (~packet[PacketOffset.FAN] & 0xFF)
    return True


def format_packet(packet: bytes) -> str:
    """Format packet bytes as upper-case hex, e.g. '4D B2 FD 02 02 FD'."""
    return " ".join(f"{b:02X}" for b in packet)


def _seal(payload: bytes) -> bytes:
    return payload + bytes([calc_checksum(payload)])


def fan_byte(state: ACState) -> int:
    """Compute byte 2 for a state.

    The fan lookup happens first and AUTO mode then overrides it. The
    stored fan selection is never consulted while mode is AUTO.
    """
    value = fan_code(state.fan)
    if state.mode == Mode.AUTO:
        value = AUTO_MODE_FAN_CODE
    return value


def encode_state(state: ACState) -> bytes:
    """Build a state packet.

    Args:
        state: Mode, temperature and fan to encode

    Returns:
        Complete 6-byte packet with checksum

    Raises:
        OutOfRangeError: If the temperature, mode or fan has no encoding
    """
    fan = fan_byte(state)
    payload = STATE_HEADER + bytes([
        fan,
        ~fan & 0xFF,
        (mode_code(state.mode) << 4) | temperature_code(state.temperature),
    ])
    return _seal(payload)


def encode_special(command: SpecialCommand) -> bytes:
    """Build a packet from a special command template.

    Returns:
        Template bytes followed by the checksum
    """
    if not isinstance(command, SpecialCommand):
        raise OutOfRangeError(f"Unknown special command: {command!r}")
    return _seal(command.template)


def encode_packet(command: ACState | SpecialCommand) -> bytes:
    """Encode either a state or a special command."""
    if isinstance(command, SpecialCommand):
        return encode_special(command)
    return encode_state(command)


# =============================================================================
# Timing Sequence
# =============================================================================


class TimingBuffer:
    """Fixed-capacity sequence of mark/space durations (unsigned 16-bit, us).

    Even indices are marks (carrier on), odd indices are spaces.
    Writing past capacity raises instead of growing or truncating.
    """

    def __init__(self, capacity: int = TIMING_BUFFER_CAPACITY) -> None:
        if capacity < 0:
            raise ValueError(f"Capacity must be non-negative, got {capacity}")
        self.capacity = capacity
        self._data = array("H")

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[int]:
        return iter(self._data)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return self._data[index].tolist()
        return self._data[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TimingBuffer):
            return self._data == other._data
        if isinstance(other, (list, tuple)):
            return self._data.tolist() == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"TimingBuffer(len={len(self)}, capacity={self.capacity})"

    def clear(self) -> None:
        del self._data[:]

    def append(self, duration: int) -> None:
        if len(self._data) >= self.capacity:
            raise CapacityExceededError(
                f"Timing buffer full ({self.capacity} entries)"
            )
        if not 0 <= duration <= MAX_DURATION:
            raise OutOfRangeError(f"Duration must fit in 16 bits, got {duration}")
        self._data.append(duration)

    def extend(self, durations: Iterable[int]) -> None:
        for duration in durations:
            self.append(duration)

    def tolist(self) -> list[int]:
        return self._data.tolist()


def _frame_durations(packet: bytes) -> Iterator[int]:
    yield Timing.HEADER_MARK
    yield Timing.HEADER_SPACE
    for byte in packet:
        for bit in range(8):  # LSB first
            yield Timing.BIT_MARK
            yield Timing.ONE_SPACE if byte & (1 << bit) else Timing.ZERO_SPACE
    yield Timing.BIT_MARK


def build_timing_sequence(
    packet: bytes, buffer: TimingBuffer | None = None
) -> TimingBuffer:
    """Expand a packet into the two-frame mark/space sequence.

    Frame 1, a 5200 us gap, then frame 2. Frame 2 ends on its trailing mark;
    the space after it belongs to whoever drives the transmitter.

    Args:
        packet: Complete 6-byte packet
        buffer: Buffer to fill (cleared first). A new one is allocated if None.

    Returns:
        The filled buffer, TIMING_SEQUENCE_LENGTH entries long

    Raises:
        ValueError: If packet is not 6 bytes
        CapacityExceededError: If buffer is too small. Nothing is written.
    """
    if len(packet) != PACKET_SIZE:
        raise ValueError(f"Packet must be {PACKET_SIZE} bytes, got {len(packet)}")
    if buffer is None:
        buffer = TimingBuffer()
    if buffer.capacity < TIMING_SEQUENCE_LENGTH:
        raise CapacityExceededError(
            f"Timing buffer holds {buffer.capacity} entries, "
            f"sequence needs {TIMING_SEQUENCE_LENGTH}"
        )

    buffer.clear()
    for repeat in range(FRAME_REPEATS):
        if repeat:
            buffer.append(Timing.FRAME_GAP)
        buffer.extend(_frame_durations(packet))
    return buffer
