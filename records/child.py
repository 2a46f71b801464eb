"""Child records."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from records.base import (
    Ageable,
    Cell,
    Record,
    format_timestamp,
    int_field,
    parse_timestamp,
    random_name,
    str_field,
    utc_now,
)

__all__ = ["Child"]


@dataclass
class Child(Record, Ageable):
    id: int
    name: str
    age: int
    birthdate: datetime

    def display_name(self) -> str:
        return self.name

    def set_display_name(self, name: str) -> None:
        self.name = name

    def render_row(self) -> list[Cell]:
        return [
            Cell("ID", str(self.id)),
            Cell("Name", self.name),
            Cell("Age", str(self.age)),
            Cell("Created At", format_timestamp(self.birthdate)),
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "age": self.age,
            "birthdate": format_timestamp(self.birthdate),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Child":
        return cls(
            id=int_field(data, "id"),
            name=str_field(data, "name"),
            age=int_field(data, "age", minimum=0),
            birthdate=parse_timestamp(str_field(data, "birthdate")),
        )

    @classmethod
    def menu_labels(cls) -> list[str]:
        return ["Home", "Children", "Add", "Edit Name", "Delete", "Quit"]

    @classmethod
    def title(cls) -> str:
        return "Children"

    @classmethod
    def kind_name(cls) -> str:
        return "child"

    @classmethod
    def app_name(cls) -> str:
        return "Child CLI"

    @classmethod
    def help_text(cls) -> list[str]:
        return [
            "Press 'c' to access children, 'a' to add random new children,",
            "'e' to edit the name of currently selected child",
            "and 'd' to delete the currently selected child.",
            "Left/Right change the age of the selected child.",
        ]

    @classmethod
    def create_placeholder(cls) -> "Child":
        return cls(
            id=random.randrange(0, 9999999),
            name=random_name(),
            age=random.randrange(1, 15),
            birthdate=utc_now(),
        )
