"""Wheel speed calculation from body velocity and heading correction."""

from __future__ import annotations

import math
from typing import Optional

from .constants import (
    ROTATION_PID_LIMIT,
    ROTATION_PID_P,
    THREAD,
    WHEEL1_ANGLE,
    WHEEL2_ANGLE,
    WHEEL3_ANGLE,
    WHEEL4_ANGLE,
    WHEEL_R,
)
from .omni import OmniWheel
from .pid import Pid
from .sensors import LineProcessor
from .vector import Vector2


class MotorController:
    """Converts a velocity command and the yaw reading into four wheel speeds."""

    def __init__(self) -> None:
        self.rotation_pid = Pid(0.0, ROTATION_PID_LIMIT).p(ROTATION_PID_P, ROTATION_PID_LIMIT)
        self.wheels = tuple(
            OmniWheel(math.radians(angle), WHEEL_R, THREAD)
            for angle in (WHEEL1_ANGLE, WHEEL2_ANGLE, WHEEL3_ANGLE, WHEEL4_ANGLE)
        )
        self.line_processor = LineProcessor()

    def calculate_motor_values(
        self, vel_x: float, vel_y: float, yaw: float
    ) -> tuple[float, float, float, float]:
        """Wheel speeds in revolutions per second, holding the heading at zero."""
        self.rotation_pid.setpoint = 0.0
        rotation_vel = self.rotation_pid.next_control_output(yaw).output
        return tuple(  # type: ignore[return-value]
            wheel.calculate(vel_x, vel_y, 0.0, rotation_vel) / (2.0 * math.pi)
            for wheel in self.wheels
        )

    def process_line(
        self, on_line: Optional[Vector2], line_threshold: float
    ) -> Optional[Vector2]:
        return self.line_processor.process_line(on_line, line_threshold)