"""Tuning values and hardware parameters of the hub board."""

import math

from .messages import HSV

LOOP_US = 1000
LINE_OVER_CENTER_THRESHOLD = math.radians(140.0)
HEAP_SIZE = 2048

WHEEL_R = 25.0 / 1000.0
THREAD = 108.0 / 1000.0

LED_COUNT = 32

DEFAULT_LINE_THRESHOLD = 0.12
DEFAULT_HAVE_BALL_THRESHOLD = 800
DEFAULT_ROBOT_SPEED_MULTIPLIER = 1.5

DEFAULT_OPENCV_GOAL_BLUE = HSV(h_min=0, h_max=110, s_min=100, s_max=255, v_min=0, v_max=255)

DEFAULT_OPENCV_GOAL_YELLOW = HSV(
    h_min=50, h_max=120, s_min=100, s_max=255, v_min=100, v_max=255
)

SPREAD_PATTERN = (
    0, 0, 0, 0, 1, 1, 1, 2, 2, 2, 3, 3, 4, 4, 5, 5,
    5, 5, 4, 4, 3, 3, 2, 2, 2, 1, 1, 1, 0, 0, 0, 0,
)

FLASH_SETTINGS_ADDRESS = 0x6_0000
FLASH_SETTINGS_SIZE = 128 * 1024
SETTINGS_BUFFER_SIZE = 128

UART_JETSON_BAUDRATE = 2_000_000
UART_MD_BAUDRATE = 2_000_000

ADC_RESOLUTION = 4096.0
LINE_SENSORS_COUNT = 32
IR_SENSORS_COUNT = 16

LINE_SPEED_MULTIPLIER = 1.5
ROTATION_PID_P = 7.0
ROTATION_PID_LIMIT = 100.0

WHEEL1_ANGLE = 45.0
WHEEL2_ANGLE = 315.0
WHEEL3_ANGLE = 225.0
WHEEL4_ANGLE = 135.0