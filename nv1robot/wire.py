"""Compact binary encoding of messages and COBS framing.

Integers wider than a byte are written as LEB128 varints, floats as
little-endian IEEE-754 single precision, booleans as one byte (0 or 1).
Frames on the serial links are COBS encoded and terminated by a zero byte.
"""

from __future__ import annotations

import math
import struct

_F32 = struct.Struct("<f")
_MAX_VARINT_BYTES = 10


class WireError(ValueError):
    """Raised when bytes cannot be decoded."""


def cobs_encode(data: bytes) -> bytes:
    """Encode ``data`` with COBS; the result holds no zero bytes and no delimiter."""
    out = bytearray(b"\x00")
    code_index = 0
    code = 1
    for byte in data:
        if byte == 0:
            out[code_index] = code
            code_index = len(out)
            out.append(0)
            code = 1
            continue
        out.append(byte)
        code += 1
        if code == 0xFF:
            out[code_index] = code
            code_index = len(out)
            out.append(0)
            code = 1
    out[code_index] = code
    return bytes(out)


def cobs_decode(data: bytes) -> bytes:
    """Decode a COBS frame, stopping at the first zero byte if there is one."""
    data = bytes(data)
    end = data.find(0)
    if end < 0:
        end = len(data)
    out = bytearray()
    index = 0
    while index < end:
        code = data[index]
        block_end = index + code
        if block_end > end:
            raise WireError("truncated COBS block")
        out += data[index + 1 : block_end]
        index = block_end
        if code != 0xFF and index < end:
            out.append(0)
    return bytes(out)


class Encoder:
    """Accumulates encoded values."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write_bool(self, value: bool) -> None:
        self._buffer.append(1 if value else 0)

    def write_u8(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"u8 out of range: {value}")
        self._buffer.append(value)

    def write_varint(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"varint must be non-negative: {value}")
        while True:
            byte = value & 0x7F
            value >>= 7
            if value:
                self._buffer.append(byte | 0x80)
            else:
                self._buffer.append(byte)
                return

    def write_f32(self, value: float) -> None:
        try:
            packed = _F32.pack(value)
        except OverflowError:
            packed = _F32.pack(math.copysign(math.inf, value))
        self._buffer += packed

    def getvalue(self) -> bytes:
        return bytes(self._buffer)


class Decoder:
    """Reads encoded values from a byte string."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def _take(self, count: int) -> bytes:
        end = self._pos + count
        if end > len(self._data):
            raise WireError("unexpected end of data")
        chunk = self._data[self._pos : end]
        self._pos = end
        return chunk

    def read_bool(self) -> bool:
        byte = self._take(1)[0]
        if byte > 1:
            raise WireError(f"invalid bool byte: {byte}")
        return byte == 1

    def read_u8(self) -> int:
        return self._take(1)[0]

    def read_varint(self) -> int:
        value = 0
        for shift in range(0, 7 * _MAX_VARINT_BYTES, 7):
            byte = self._take(1)[0]
            value |= (byte & 0x7F) << shift
            if not byte & 0x80:
                return value
        raise WireError("varint too long")

    def read_f32(self) -> float:
        return _F32.unpack(self._take(4))[0]

    def remaining(self) -> int:
        return len(self._data) - self._pos