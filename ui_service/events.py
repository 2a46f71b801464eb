"""Events delivered from the input pump to the dashboard loops."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Union

__all__ = ["EventChannel", "InputEvent", "KeyPress", "Tick"]


@dataclass(frozen=True)
class KeyPress:
    """A normalized key: a single character or a name like ``"up"``/``"enter"``."""

    key: str


@dataclass(frozen=True)
class Tick:
    pass


InputEvent = Union[KeyPress, Tick]


class EventChannel(Protocol):
    """Receiving end of the event stream; only one loop reads it at a time."""

    def recv(self) -> InputEvent:
        ...
