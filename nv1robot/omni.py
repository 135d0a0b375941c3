"""Inverse kinematics of a single omni wheel."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class OmniWheel:
    wheel_angle: float
    wheel_r: float
    tread: float

    def calculate(
        self, linear_x: float, linear_y: float, angle: float, angle_speed: float
    ) -> float:
        """Angular velocity of the wheel for the given body velocity."""
        heading = angle + self.wheel_angle
        return (
            -math.sin(heading) * math.cos(angle) * linear_x
            + math.cos(heading) * math.cos(angle) * linear_y
            + angle_speed * self.tread
        ) / self.wheel_r