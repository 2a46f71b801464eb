"""Capability contract shared by every record kind shown in the dashboard."""

from __future__ import annotations

import random
import string
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from enum import Enum
from typing import Any, NamedTuple, TypeVar

__all__ = [
    "Ageable",
    "Cell",
    "Command",
    "Record",
    "format_timestamp",
    "int_field",
    "parse_timestamp",
    "random_name",
    "str_field",
    "utc_now",
]

NAME_LENGTH = 10
_ALPHANUMERIC = string.ascii_letters + string.digits

R = TypeVar("R", bound="Record")


class Command(Enum):
    """Top-level commands, in the order their menu labels are listed."""

    HOME = "home"
    DATA = "data"
    ADD = "add"
    EDIT = "edit"
    DELETE = "delete"
    QUIT = "quit"


MENU_COMMANDS = list(Command)


class Cell(NamedTuple):
    """One labeled cell of a record's detail row.

    ``ratio`` is the relative column width used by the detail table.
    """

    label: str
    value: str
    ratio: int = 1


def random_name(length: int = NAME_LENGTH) -> str:
    return "".join(random.choice(_ALPHANUMERIC) for _ in range(length))


def utc_now() -> datetime:
    """Current UTC time truncated to whole seconds."""
    return datetime.now(timezone.utc).replace(microsecond=0)


def format_timestamp(value: datetime) -> str:
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def int_field(data: dict[str, Any], key: str, minimum: int | None = None) -> int:
    """Fetch an integer field from decoded JSON, rejecting floats and booleans."""
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{key} must be an integer, got {type(value).__name__}")
    if minimum is not None and value < minimum:
        raise ValueError(f"{key} must be at least {minimum}, got {value}")
    return value


def str_field(data: dict[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


class Record(ABC):
    """Interface the renderer and main loop rely on.

    Nothing outside a concrete record class knows its fields; the UI only
    goes through these methods.
    """

    @abstractmethod
    def display_name(self) -> str:
        ...

    @abstractmethod
    def set_display_name(self, name: str) -> None:
        ...

    @abstractmethod
    def render_row(self) -> list[Cell]:
        """Labeled cells for the detail table, in display order."""

    @abstractmethod
    def to_dict(self) -> dict[str, Any]:
        ...

    @classmethod
    @abstractmethod
    def from_dict(cls: type[R], data: dict[str, Any]) -> R:
        """Build a record from its JSON object, raising on schema mismatch."""

    @classmethod
    @abstractmethod
    def menu_labels(cls) -> list[str]:
        """One label per command, ordered home, data, add, edit, delete, quit."""

    @classmethod
    @abstractmethod
    def title(cls) -> str:
        ...

    @classmethod
    @abstractmethod
    def kind_name(cls) -> str:
        """Singular noun used in messages."""

    @classmethod
    @abstractmethod
    def app_name(cls) -> str:
        ...

    @classmethod
    @abstractmethod
    def help_text(cls) -> list[str]:
        ...

    @classmethod
    @abstractmethod
    def create_placeholder(cls: type[R]) -> R:
        """Randomly populated instance; id collisions are not checked."""

    @classmethod
    def key_bindings(cls) -> dict[Command, str]:
        """Mnemonic key for each command: the first letter of its menu label."""
        labels = cls.menu_labels()
        if len(labels) != len(MENU_COMMANDS):
            raise ValueError(
                f"{cls.__name__} must define {len(MENU_COMMANDS)} menu labels, got {len(labels)}"
            )
        return {command: label[0].lower() for command, label in zip(MENU_COMMANDS, labels)}


class Ageable:
    """Optional capability for records with a non-negative ``age`` attribute."""

    age: int

    def set_age(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"age must be non-negative, got {value}")
        self.age = value

    def increment_age(self, amount: int = 1) -> None:
        self.set_age(self.age + amount)

    def decrement_age(self, amount: int = 1) -> None:
        # Saturates at zero
        self.set_age(max(self.age - amount, 0))
