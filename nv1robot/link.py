"""Serial link between the hub board and the Jetson."""

from __future__ import annotations

import dataclasses
from typing import Optional

from .messages import ToHub, ToJetson, decode_frame, encode_frame
from .neopixel import NeoPixelData
from .wire import WireError

FRAME_CAPACITY = 64
TIMEOUT_LIMIT = 100
_INITIAL_TIMEOUTS = 9999


class FrameReader:
    """Collects bytes into zero-terminated frames."""

    def __init__(self, capacity: int = FRAME_CAPACITY) -> None:
        self.capacity = capacity
        self._buffer = bytearray()

    @property
    def pending(self) -> bytes:
        return bytes(self._buffer)

    def feed(self, byte: int) -> Optional[bytes]:
        """Add a byte; return the complete frame, terminator included, when it ends one."""
        if len(self._buffer) >= self.capacity:
            self.reset()
            raise WireError("frame longer than the receive buffer")
        self._buffer.append(byte)
        if byte == 0:
            frame = bytes(self._buffer)
            self.reset()
            return frame
        return None

    def reset(self) -> None:
        self._buffer.clear()


class HubLink:
    """Hub side of the Jetson link: the last command received and the status to send.

    After more than 100 read timeouts without data the command falls back to
    a standstill and the Jetson counts as disconnected.
    """

    def __init__(self, neo_pixel: Optional[NeoPixelData] = None) -> None:
        self.incoming = ToHub()
        self.outgoing = ToJetson()
        self.jetson_connecting = False
        self.timeout_count = _INITIAL_TIMEOUTS
        self.neo_pixel = neo_pixel

    def _set_connecting(self, value: bool) -> None:
        self.jetson_connecting = value
        if self.neo_pixel is not None:
            self.neo_pixel.jetson_connecting = value

    def receive(self, frame: bytes) -> Optional[ToHub]:
        """Decode a received frame; return the command, or None if it does not decode."""
        if any(frame):
            self.timeout_count = 0
        try:
            message = decode_frame(ToHub, frame)
        except WireError:
            return None
        self.incoming = message
        self._set_connecting(True)
        return message

    def timeout(self) -> None:
        self.timeout_count += 1

    def take_outgoing(self) -> bytes:
        """Frame holding the pending status; the pending status resets to its default."""
        message = self.outgoing
        self.outgoing = ToJetson()
        return encode_frame(message)

    def finish_cycle(self) -> bool:
        """Apply the timeout rule at the end of a cycle; return whether the Jetson is connected."""
        if self.timeout_count > TIMEOUT_LIMIT:
            self.incoming = ToHub()
            self._set_connecting(False)
        else:
            self._set_connecting(True)
        return self.jetson_connecting

    def send_system_command(self, shutdown: bool, reboot: bool) -> None:
        """Mark the pending status as a shutdown or reboot request."""
        message = self.outgoing
        self.outgoing = dataclasses.replace(
            message,
            sys=dataclasses.replace(message.sys, shutdown=shutdown, reboot=reboot),
        )