# nv1robot

The control side of a small four-wheel omni-drive soccer robot, as plain
Python with no dependencies. It is a library: every part works on values you
pass in, so it can be driven by tests, a simulator or your own I/O code.

## What is in it

- **Wire messages** (`nv1robot.wire`, `nv1robot.messages`): `ToHub`,
  `ToJetson`, `ToMD` and their parts, encoded as compact binary records
  (LEB128 varints, little-endian single-precision floats, one-byte booleans)
  and framed with COBS, each frame ending with a zero byte.
- **Drive maths**: `Vector2` (`nv1robot.vector`), `OmniWheel`
  (`nv1robot.omni`), `Pid` (`nv1robot.pid`) and `MotorController`
  (`nv1robot.motor_controller`), which turns a velocity and a yaw into four
  wheel speeds.
- **Motor outputs** (`nv1robot.motor`): `Pwm`, `MotorGroup` and `Motors`,
  which map signed speeds to duty values on pairs of PWM channels.
- **Sensors** (`nv1robot.sensors`): the line ring and IR ring geometry in
  `SensorArray`, the vector helpers, and the line-escape state machine
  `LineProcessor` (states `OnGround`, `OnLine`, `OutOfLineOverCenter`).
- **Hub loop** (`nv1robot.hub_loop`): `HubLoop.step` combines settings, yaw,
  sensor readings, the pause switch and the last Jetson command into the
  motor-driver command and the status for the Jetson.
- **Jetson link** (`nv1robot.link`): `FrameReader` collects zero-terminated
  frames; `HubLink` holds the last command and the pending status and applies
  the timeout rule.
- **Jetson helpers** (`nv1robot.jetson`): `JetsonBridge` turns hub status
  into published values and kicker pulses; `twist_to_hub`, `hsv_payload`,
  `gstreamer_pipeline`, `convert_pixel_to_theta` and `largest_component`.
- **Status LEDs** (`nv1robot.neopixel`): `RingAnimator` produces LED frames
  and `NeoPixelEncoder` scales colours and turns them into per-bit duty values.
- **On-board menu** (`nv1robot.hubui`): a 128×64 monochrome `Canvas`, the
  `HubUI` event loop, `ListMenu` and `RobotStatusMenu`, the elements `Text`,
  `Value`, `Button` and `Slider`, and the hub's settings panel built by
  `build_hub_panel`.
- **Settings** (`nv1robot.settings`): thresholds and goal colours, stored in
  the in-memory `FlashStore`.
- **Constants** (`nv1robot.constants`): loop period, wheel geometry, default
  thresholds and colours, sensor counts.

## Installing

```
pip install .
```

Install with `pip install .[test]` and run `pytest` for the test suite.

## Messages on the wire

```python
from nv1robot.messages import ToMD, encode_frame, decode_frame

frame = encode_frame(ToMD(enable=True, m1=1.0, m2=-1.0, m3=0.5, m4=0.0))
assert frame.endswith(b"\x00")
assert decode_frame(ToMD, frame).m2 == -1.0
```

`encode` and `decode` work on the unframed bytes; trailing bytes are ignored
when decoding. Malformed data raises `nv1robot.wire.WireError`.

Bytes arriving one at a time can be gathered with `FrameReader.feed`, which
returns the complete frame when it reads the terminating zero and raises
`WireError` if a frame outgrows its 64-byte buffer.

## Driving

```python
from nv1robot.motor_controller import MotorController

controller = MotorController()
m1, m2, m3, m4 = controller.calculate_motor_values(0.0, 1.0, 0.0)
```

The yaw is held at zero by a proportional controller. The results are wheel
speeds in revolutions per second.

## Settings

```python
from nv1robot.settings import Settings, FlashStore, flash_read, flash_write

store = FlashStore()
settings = Settings.default()
settings.toggle_goal_color()
flash_write(store, settings)
assert flash_read(store).opp_color() == settings.opp_color()
```

If the stored bytes cannot be decoded, the defaults are returned.
`validate_and_fix_settings` replaces a NaN line threshold with the default
and saves the settings again. `FlashStore` behaves like flash memory: erased
bytes read as `0xFF` and only erased bytes may be written.

## The on-board menu

```python
from nv1robot.hubui.canvas import Canvas
from nv1robot.hubui.core import Event, EventKey
from nv1robot.hubui.panel import UiState, build_hub_panel
from nv1robot.link import HubLink
from nv1robot.settings import FlashStore

link = HubLink()
panel = build_hub_panel(Canvas(), UiState(), FlashStore(), link.send_system_command)
canvas = panel.handle(Event.key_down(EventKey.DOWN))
```

Shapes are drawn into the canvas pixels; text is not rasterised but recorded
in `Canvas.texts` with its position, font and colour.

## What it does not do

- It talks to no hardware: there is no serial port, ADC, GPIO, timer, display
  or camera access. `Pwm`, `FlashStore` and `Canvas` are in-memory stand-ins.
- It has no wheel-speed loop for the motor driver board (encoder reading and
  per-wheel speed control); only the motor output mapping in `nv1robot.motor`
  is provided.
- It does no image processing: `largest_component` picks a box from component
  statistics you supply, and `gstreamer_pipeline` only builds the description
  string.
- It provides no command-line program.