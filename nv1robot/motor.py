"""H-bridge motor control over PWM channel pairs."""

from __future__ import annotations

from dataclasses import dataclass

_CHANNELS = (1, 2, 3, 4)
_I16_MIN = -(2**15)
_I16_MAX = 2**15 - 1
_U16_MAX = 0xFFFF


class Pwm:
    """A PWM timer with four output channels numbered 1 to 4."""

    def __init__(self, max_duty: int, frequency: float = 470) -> None:
        if max_duty <= 0:
            raise ValueError("max duty must be positive")
        if frequency <= 0:
            raise ValueError("frequency must be positive")
        self._max_duty = max_duty
        self.frequency = frequency
        self.duties = dict.fromkeys(_CHANNELS, 0)

    def max_duty(self) -> int:
        return self._max_duty

    def set_duty(self, channel: int, duty: int) -> None:
        if channel not in self.duties:
            raise ValueError(f"unknown channel: {channel}")
        if not 0 <= duty <= self._max_duty:
            raise ValueError(f"duty {duty} outside 0..{self._max_duty}")
        self.duties[channel] = duty

    def set_frequency(self, frequency: float) -> None:
        if frequency <= 0:
            raise ValueError("frequency must be positive")
        self.frequency = frequency


@dataclass(frozen=True)
class _Motor:
    ch_a: int
    ch_b: int


class MotorGroup:
    """Two motors driven from one PWM timer, each by a pair of channels.

    Speeds are signed and scaled so that ``width`` gives full duty.
    """

    def __init__(
        self,
        pwm: Pwm,
        motor1_a: int,
        motor1_b: int,
        motor2_a: int,
        motor2_b: int,
        width: int,
    ) -> None:
        if width <= 0:
            raise ValueError("width must be positive")
        self.pwm = pwm
        self._motor1 = _Motor(motor1_a, motor1_b)
        self._motor2 = _Motor(motor2_a, motor2_b)
        self._multiply = pwm.max_duty() / width

    def _duty(self, magnitude: int) -> int:
        return min(max(int(magnitude * self._multiply), 0), _U16_MAX)

    def _drive(self, motor: _Motor, speed: int) -> None:
        if not _I16_MIN <= speed <= _I16_MAX:
            raise ValueError(f"speed out of range: {speed}")
        if speed > 0:
            self.pwm.set_duty(motor.ch_a, self._duty(speed))
            self.pwm.set_duty(motor.ch_b, 0)
        else:
            self.pwm.set_duty(motor.ch_a, 0)
            self.pwm.set_duty(motor.ch_b, self._duty(-speed))

    def _stop(self, motor: _Motor) -> None:
        self.pwm.set_duty(motor.ch_a, 0)
        self.pwm.set_duty(motor.ch_b, 0)

    def set_speed1(self, speed: int) -> None:
        self._drive(self._motor1, speed)

    def stop1(self) -> None:
        self._stop(self._motor1)

    def set_speed2(self, speed: int) -> None:
        self._drive(self._motor2, speed)

    def stop2(self) -> None:
        self._stop(self._motor2)

    def set_frequency(self, frequency: float) -> None:
        self.pwm.set_frequency(frequency)


class Motors:
    """Four motors: 1 and 2 on ``group1``, 3 and 4 on ``group2``."""

    def __init__(self, group1: MotorGroup, group2: MotorGroup) -> None:
        self.group1 = group1
        self.group2 = group2

    def set_speed1(self, speed: int) -> None:
        self.group1.set_speed1(speed)

    def stop1(self) -> None:
        self.group1.stop1()

    def set_speed2(self, speed: int) -> None:
        self.group1.set_speed2(speed)

    def stop2(self) -> None:
        self.group1.stop2()

    def set_speed3(self, speed: int) -> None:
        self.group2.set_speed1(speed)

    def stop3(self) -> None:
        self.group2.stop1()

    def set_speed4(self, speed: int) -> None:
        self.group2.set_speed2(speed)

    def stop4(self) -> None:
        self.group2.stop2()

    def set_frequency(self, frequency: float) -> None:
        self.group1.set_frequency(frequency)
        self.group2.set_frequency(frequency)