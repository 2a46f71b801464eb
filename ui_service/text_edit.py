"""Modal text capture used to rename the selected record."""

from __future__ import annotations

from typing import Callable

from ui_service.events import EventChannel, KeyPress, Tick

__all__ = ["edit_text"]


def edit_text(channel: EventChannel, on_preview: Callable[[str], None]) -> str:
    """
    Read keys from ``channel`` into a buffer until a terminating key.
    
    The caller keeps no other reader on the channel while this runs.
    Alphanumeric characters are appended and backspace drops the last one.
    Any other key ends editing and is discarded. Each tick hands the current
    buffer to ``on_preview`` so the caller can show it without persisting.
    
    Args:
        channel: Event stream shared with the outer loop
        on_preview: Called with the buffer on every tick
        
    Returns:
        The final buffer, possibly empty
    """
    buffer = ""
    while True:
        event = channel.recv()
        if isinstance(event, Tick):
            on_preview(buffer)
            continue
        if not isinstance(event, KeyPress):
            continue
        key = event.key
        if key == "backspace":
            buffer = buffer[:-1]
        elif len(key) == 1 and key.isalnum():
            buffer += key
        else:
            return buffer
