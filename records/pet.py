"""Pet records."""

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

__all__ = ["Pet"]

CATEGORIES = ("cats", "dogs")


@dataclass
class Pet(Record, Ageable):
    id: int
    name: str
    category: str
    age: int
    created_at: datetime

    def display_name(self) -> str:
        return self.name

    def set_display_name(self, name: str) -> None:
        self.name = name

    def render_row(self) -> list[Cell]:
        return [
            Cell("ID", str(self.id), 1),
            Cell("Name", self.name, 4),
            Cell("Category", self.category, 4),
            Cell("Age", str(self.age), 1),
            Cell("Created At", format_timestamp(self.created_at), 4),
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "age": self.age,
            "created_at": format_timestamp(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pet":
        return cls(
            id=int_field(data, "id"),
            name=str_field(data, "name"),
            category=str_field(data, "category"),
            age=int_field(data, "age", minimum=0),
            created_at=parse_timestamp(str_field(data, "created_at")),
        )

    @classmethod
    def menu_labels(cls) -> list[str]:
        return ["Home", "Pets", "Add", "Edit Name", "Delete", "Quit"]

    @classmethod
    def title(cls) -> str:
        return "Pets"

    @classmethod
    def kind_name(cls) -> str:
        return "pet"

    @classmethod
    def app_name(cls) -> str:
        return "pet CLI"

    @classmethod
    def help_text(cls) -> list[str]:
        return [
            "Press 'p' to access pets, 'a' to add random new pets,",
            "'e' to edit the name of currently selected pet",
            "and 'd' to delete the currently selected pet.",
            "Left/Right change the age of the selected pet.",
        ]

    @classmethod
    def create_placeholder(cls) -> "Pet":
        return cls(
            id=random.randrange(0, 9999999),
            name=random_name(),
            category=random.choice(CATEGORIES),
            age=random.randrange(1, 15),
            created_at=utc_now(),
        )
