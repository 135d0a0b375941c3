"""Jetson side of the robot: serial bridge to the hub and goal detection helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .messages import HSV, Movement, OpenCVConfig, ToHub, ToJetson

IR_STRENGTH_LIMIT = 2.0
KICK_ANGLE_LIMIT = 2.0
KICK_PULSE_MS = 100
CAMERA_CENTER_X = 360
PIXELS_PER_DEGREE = 6.0

_CC_STAT_LEFT = 0
_CC_STAT_TOP = 1
_CC_STAT_WIDTH = 2
_CC_STAT_HEIGHT = 3
_CC_STAT_AREA = 4


@dataclass(frozen=True)
class Vector3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class BridgeOutput:
    """What one status message from the hub turns into on the Jetson.

    ``speed`` holds the commanded x and y and the yaw in ``z``; ``ir`` holds
    the ball direction and, in ``z``, its strength. ``kick`` asks for one
    pulse of the kicker. ``hsv_own`` and ``hsv_opp`` are the colour ranges to
    publish, or None when the message carries no camera configuration.
    """

    speed: Vector3
    ir: Vector3
    have_ball: bool
    kick: bool
    shutdown: bool
    reboot: bool
    hsv_own: Optional[tuple[int, ...]] = None
    hsv_opp: Optional[tuple[int, ...]] = None


def twist_to_hub(linear_x: float, linear_y: float, angular_z: float) -> ToHub:
    """Velocity command for the hub from a twist; kicking and goals are left unset."""
    return ToHub(
        vel=Movement(float(linear_x), float(linear_y), float(angular_z)),
        kick=False,
        goal_opp=None,
        goal_own=None,
    )


def hsv_payload(color: HSV) -> tuple[int, int, int, int, int, int]:
    """The six bounds of a colour range in publishing order."""
    return (
        color.h_min,
        color.h_max,
        color.s_min,
        color.s_max,
        color.v_min,
        color.v_max,
    )


class JetsonBridge:
    """Turns hub status messages into published values and kicker pulses.

    The kicker fires once when the ball is held while the robot faces
    forward (|yaw| below 2 rad), and not again until that condition has
    been broken.
    """

    def __init__(self) -> None:
        self.prev_kick = False
        self.have_ball = False

    def handle(self, message: ToJetson) -> BridgeOutput:
        strength = message.sensor.ir.strength
        ir_strength = 0.0 if strength > IR_STRENGTH_LIMIT else float(strength)

        have_ball = bool(message.sensor.have_ball)
        self.have_ball = have_ball

        kick = False
        if have_ball and abs(message.vel.angle) < KICK_ANGLE_LIMIT:
            kick = not self.prev_kick
            self.prev_kick = True
        else:
            self.prev_kick = False

        hsv_own: Optional[tuple[int, ...]] = None
        hsv_opp: Optional[tuple[int, ...]] = None
        config = message.config
        if isinstance(config, OpenCVConfig):
            hsv_own = hsv_payload(config.own_color)
            hsv_opp = hsv_payload(config.opp_color)

        return BridgeOutput(
            speed=Vector3(
                float(message.vel.x), float(message.vel.y), float(message.vel.angle)
            ),
            ir=Vector3(
                float(message.sensor.ir.x), float(message.sensor.ir.y), ir_strength
            ),
            have_ball=have_ball,
            kick=kick,
            shutdown=bool(message.sys.shutdown),
            reboot=bool(message.sys.reboot),
            hsv_own=hsv_own,
            hsv_opp=hsv_opp,
        )


def gstreamer_pipeline(
    sensor_id: int,
    capture_width: int,
    capture_height: int,
    display_width: int,
    display_height: int,
    framerate: int,
    flip_method: int,
) -> str:
    """Capture pipeline description for a CSI camera delivering BGR frames."""
    return (
        f"nvarguscamerasrc sensor-id={sensor_id} ! video/x-raw(memory:NVMM), "
        f"width=(int){capture_width}, height=(int){capture_height}, "
        f"framerate=(fraction){framerate}/1 ! nvvidconv flip-method={flip_method} ! "
        f"video/x-raw, width=(int){display_width}, height=(int){display_height}, "
        f"format=(string)BGRx ! videoconvert ! video/x-raw, format=(string)BGR ! appsink"
    )


def convert_pixel_to_theta(x: int) -> float:
    """Horizontal angle, in degrees, of image column ``x`` from the image centre."""
    return (x - CAMERA_CENTER_X) / PIXELS_PER_DEGREE


def largest_component(
    stats: Sequence[Sequence[int]],
) -> Optional[tuple[int, int, int, int]]:
    """Bounding box (left, top, width, height) of the largest labelled component.

    ``stats`` has one row per label as left, top, width, height, area; row 0
    is the background and is ignored. Components of zero area are never
    chosen; on equal areas the first one wins.
    """
    best: Optional[tuple[int, int, int, int]] = None
    max_area = 0
    for row in list(stats)[1:]:
        area = row[_CC_STAT_AREA]
        if area > max_area:
            max_area = area
            best = (
                row[_CC_STAT_LEFT],
                row[_CC_STAT_TOP],
                row[_CC_STAT_WIDTH],
                row[_CC_STAT_HEIGHT],
            )
    return best