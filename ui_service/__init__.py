"""Terminal UI engine for the record dashboard."""

from ui_service.dashboard import Dashboard
from ui_service.errors import ChannelError, TerminalError
from ui_service.events import KeyPress, Tick
from ui_service.input_pump import InputPump, default_key_source
from ui_service.terminal import Terminal

__all__ = [
    "ChannelError",
    "Dashboard",
    "InputPump",
    "KeyPress",
    "Terminal",
    "TerminalError",
    "Tick",
    "default_key_source",
]
