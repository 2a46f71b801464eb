"""Record kinds the dashboard can display."""

from records.base import Ageable, Cell, Command, Record, random_name
from records.child import Child
from records.pet import Pet

RECORD_KINDS = {
    "pet": Pet,
    "child": Child,
}

__all__ = ["Ageable", "Cell", "Child", "Command", "Pet", "Record", "RECORD_KINDS", "random_name"]
