"""Messages exchanged between the Jetson, the hub board and the motor driver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Type, TypeVar

from .wire import Decoder, Encoder, WireError, cobs_decode, cobs_encode

T = TypeVar("T")


def _write_optional_f32(enc: Encoder, value: Optional[float]) -> None:
    if value is None:
        enc.write_u8(0)
    else:
        enc.write_u8(1)
        enc.write_f32(value)


def _read_optional_f32(dec: Decoder) -> Optional[float]:
    tag = dec.read_u8()
    if tag == 0:
        return None
    if tag == 1:
        return dec.read_f32()
    raise WireError(f"invalid option tag: {tag}")


@dataclass(frozen=True)
class Movement:
    x: float = 0.0
    y: float = 0.0
    angle: float = 0.0

    def _write(self, enc: Encoder) -> None:
        enc.write_f32(self.x)
        enc.write_f32(self.y)
        enc.write_f32(self.angle)

    @classmethod
    def _read(cls, dec: Decoder) -> "Movement":
        return cls(dec.read_f32(), dec.read_f32(), dec.read_f32())


@dataclass(frozen=True)
class ToHub:
    """Command sent from the Jetson to the hub board."""

    vel: Movement = field(default_factory=Movement)
    kick: bool = False
    goal_opp: Optional[float] = None
    goal_own: Optional[float] = None

    def _write(self, enc: Encoder) -> None:
        self.vel._write(enc)
        enc.write_bool(self.kick)
        _write_optional_f32(enc, self.goal_opp)
        _write_optional_f32(enc, self.goal_own)

    @classmethod
    def _read(cls, dec: Decoder) -> "ToHub":
        return cls(
            Movement._read(dec),
            dec.read_bool(),
            _read_optional_f32(dec),
            _read_optional_f32(dec),
        )


@dataclass(frozen=True)
class System:
    pause: bool = False
    shutdown: bool = False
    reboot: bool = False

    def _write(self, enc: Encoder) -> None:
        enc.write_bool(self.pause)
        enc.write_bool(self.shutdown)
        enc.write_bool(self.reboot)

    @classmethod
    def _read(cls, dec: Decoder) -> "System":
        return cls(dec.read_bool(), dec.read_bool(), dec.read_bool())


@dataclass(frozen=True)
class Ir:
    x: float = 0.0
    y: float = 0.0
    strength: float = 0.0

    def _write(self, enc: Encoder) -> None:
        enc.write_f32(self.x)
        enc.write_f32(self.y)
        enc.write_f32(self.strength)

    @classmethod
    def _read(cls, dec: Decoder) -> "Ir":
        return cls(dec.read_f32(), dec.read_f32(), dec.read_f32())


@dataclass(frozen=True)
class Sensor:
    ir: Ir = field(default_factory=Ir)
    on_line: bool = False
    have_ball: bool = False

    def _write(self, enc: Encoder) -> None:
        self.ir._write(enc)
        enc.write_bool(self.on_line)
        enc.write_bool(self.have_ball)

    @classmethod
    def _read(cls, dec: Decoder) -> "Sensor":
        return cls(Ir._read(dec), dec.read_bool(), dec.read_bool())


@dataclass(frozen=True)
class HSV:
    """Colour range used by the goal detector."""

    h_min: int = 0
    h_max: int = 0
    s_min: int = 0
    s_max: int = 0
    v_min: int = 0
    v_max: int = 0

    def _values(self) -> tuple[int, ...]:
        return (self.h_min, self.h_max, self.s_min, self.s_max, self.v_min, self.v_max)

    def _write(self, enc: Encoder) -> None:
        for value in self._values():
            enc.write_u8(value)

    @classmethod
    def _read(cls, dec: Decoder) -> "HSV":
        return cls(*(dec.read_u8() for _ in range(6)))


@dataclass(frozen=True)
class OpenCVConfig:
    opp_color: HSV = field(default_factory=HSV)
    own_color: HSV = field(default_factory=HSV)

    def _write(self, enc: Encoder) -> None:
        self.opp_color._write(enc)
        self.own_color._write(enc)

    @classmethod
    def _read(cls, dec: Decoder) -> "OpenCVConfig":
        return cls(HSV._read(dec), HSV._read(dec))


@dataclass(frozen=True)
class ToJetson:
    """Status sent from the hub board to the Jetson.

    ``config`` is ``None`` when no camera configuration is attached.
    """

    sys: System = field(default_factory=System)
    vel: Movement = field(default_factory=Movement)
    sensor: Sensor = field(default_factory=Sensor)
    config: Optional[OpenCVConfig] = None

    def _write(self, enc: Encoder) -> None:
        self.sys._write(enc)
        self.vel._write(enc)
        self.sensor._write(enc)
        if self.config is None:
            enc.write_varint(0)
        else:
            enc.write_varint(1)
            self.config._write(enc)

    @classmethod
    def _read(cls, dec: Decoder) -> "ToJetson":
        sys = System._read(dec)
        vel = Movement._read(dec)
        sensor = Sensor._read(dec)
        tag = dec.read_varint()
        if tag == 0:
            config = None
        elif tag == 1:
            config = OpenCVConfig._read(dec)
        else:
            raise WireError(f"invalid config variant: {tag}")
        return cls(sys, vel, sensor, config)


@dataclass(frozen=True)
class ToMD:
    """Wheel speed command sent from the hub board to the motor driver."""

    enable: bool = False
    m1: float = 0.0
    m2: float = 0.0
    m3: float = 0.0
    m4: float = 0.0

    def _write(self, enc: Encoder) -> None:
        enc.write_bool(self.enable)
        for value in (self.m1, self.m2, self.m3, self.m4):
            enc.write_f32(value)

    @classmethod
    def _read(cls, dec: Decoder) -> "ToMD":
        return cls(
            dec.read_bool(),
            dec.read_f32(),
            dec.read_f32(),
            dec.read_f32(),
            dec.read_f32(),
        )


def encode(message) -> bytes:
    """Encode a message into its binary form."""
    enc = Encoder()
    message._write(enc)
    return enc.getvalue()


def decode(message_type: Type[T], data: bytes) -> T:
    """Decode a message of ``message_type``; trailing bytes are ignored."""
    return message_type._read(Decoder(data))


def encode_frame(message) -> bytes:
    """Encode a message as a zero-terminated COBS frame."""
    return cobs_encode(encode(message)) + b"\x00"


def decode_frame(message_type: Type[T], frame: bytes) -> T:
    """Decode a COBS frame holding a message of ``message_type``."""
    return decode(message_type, cobs_decode(frame))