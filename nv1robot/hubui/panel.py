"""The hub board's setup panel: menu layout, callbacks and input handling."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from ..settings import FlashStore, GoalColor, Settings, flash_read, flash_write
from .canvas import FONT_6X10, Point, Size
from .core import Event, HubUI
from .elements import Button, Slider, Text, Value
from .menu import ListMenu, ListMenuOption, RobotStatusMenu, RobotStatusMenuOption

_INIT_ATTEMPTS = 10


@dataclass
class UiState:
    """Values the panel shares with the control loop."""

    settings: Settings = field(default_factory=Settings.default)
    shutdown: bool = False
    reboot: bool = False
    value_line: float = 0.0
    value_have_ball: int = 0


def try_initialize_display(init: Callable[[], object], attempts: int = _INIT_ATTEMPTS) -> bool:
    """Call ``init`` until it succeeds without raising; give up after ``attempts`` tries."""
    for _ in range(attempts):
        try:
            init()
        except Exception:
            continue
        return True
    return False


class HubPanel:
    """Feeds input events to the UI and forwards shutdown and reboot requests."""

    def __init__(
        self,
        ui: HubUI,
        state: UiState,
        send_system_command: Callable[[bool, bool], None],
    ) -> None:
        self.ui = ui
        self.state = state
        self._send_system_command = send_system_command

    def handle(self, event: Event):
        display = self.ui.update(event)
        if self.state.shutdown:
            self.state.shutdown = False
            self._send_system_command(True, False)
        if self.state.reboot:
            self.state.reboot = False
            self._send_system_command(False, True)
        return display


def build_hub_panel(
    display,
    state: UiState,
    store: FlashStore,
    send_system_command: Callable[[bool, bool], None],
) -> HubPanel:
    """Create the panel: a settings list on the right and the robot outline on the left."""

    def save() -> None:
        flash_write(store, state.settings)

    def on_shutdown(pressed: bool) -> None:
        state.shutdown = pressed

    def on_reboot(pressed: bool) -> None:
        state.reboot = pressed

    def coat(_value):
        return "B" if state.settings.opp_goal_color is GoalColor.BLUE else "Y"

    def on_coat_change(pressed: bool) -> None:
        if pressed:
            state.settings.toggle_goal_color()
            save()

    def on_line_threshold(value: float) -> None:
        state.settings.line_threshold = value
        save()

    def on_have_ball_threshold(value: int) -> None:
        state.settings.have_ball_threshold = value
        save()

    def on_speed(value: float) -> None:
        state.settings.robot_speed_multiplier = value
        save()

    def on_reset(pressed: bool) -> None:
        if pressed:
            flash_write(store, Settings.default())
            state.settings = flash_read(store)

    settings = state.settings
    elements = [
        Text("INTERFACE", FONT_6X10),
        Button("Shutdown", on_shutdown, FONT_6X10),
        Button("Reboot", on_reboot, FONT_6X10),
        Value("ATK", "", coat, FONT_6X10),
        Button("SW Coat", on_coat_change, FONT_6X10),
        Value("L", 0.0, lambda _v: state.value_line, FONT_6X10),
        Slider(settings.line_threshold, 0.0, 1.0, 0.005, on_line_threshold, FONT_6X10),
        Value("B", 0, lambda _v: state.value_have_ball, FONT_6X10),
        Slider(settings.have_ball_threshold, 0, 2000, 50, on_have_ball_threshold, FONT_6X10),
        Text("Speed", FONT_6X10),
        Slider(settings.robot_speed_multiplier, 0.0, 5.0, 0.1, on_speed, FONT_6X10),
        Button("Reset", on_reset, FONT_6X10),
    ]

    menus = [
        ListMenu(
            elements,
            ListMenuOption(
                position=Point(64, 0),
                size=Size(64, 64),
                vertical_num=4,
                element_margin=1,
                cursor_line_len=4,
            ),
        ),
        RobotStatusMenu(RobotStatusMenuOption(position=Point(2, 2), size=Size(56, 56))),
    ]
    return HubPanel(HubUI(display, menus), state, send_system_command)