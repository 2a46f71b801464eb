"""Main event loop: owns the view state and dispatches key presses."""

from __future__ import annotations

from typing import Generic, TypeVar

from common.logging_setup import get_logger
from records.base import Ageable, Command, Record, random_name
from storage.json_store import JsonStore, StoreError
from ui_service.events import EventChannel, KeyPress, Tick
from ui_service.render import render
from ui_service.state import DashboardState, View
from ui_service.text_edit import edit_text

__all__ = ["Dashboard"]

logger = get_logger(__name__)

R = TypeVar("R", bound=Record)


class Dashboard(Generic[R]):
    """
    Generic record browser driven by a single event channel.
    
    Key presses are dispatched to commands; store errors raised by a command
    are shown as a footer notice and the loop carries on. Terminal and
    channel failures propagate to the caller.
    """
    
    def __init__(
        self,
        record_type: type[R],
        store: JsonStore[R],
        channel: EventChannel,
        terminal,
        notice_ttl: float = 3.0,
    ) -> None:
        self.record_type = record_type
        self.store = store
        self.state = DashboardState()
        self.records: list[R] = []
        self._channel = channel
        self._terminal = terminal
        self._notice_ttl = notice_ttl
        self._commands = {key: command for command, key in record_type.key_bindings().items()}
    
    def run(self) -> None:
        """Load the collection and process events until quit."""
        self.records = self.store.read_all()
        logger.info(f"Loaded {len(self.records)} {self.record_type.title().lower()} from {self.store.path}")
        while True:
            self.draw()
            event = self._channel.recv()
            if isinstance(event, Tick):
                continue
            if isinstance(event, KeyPress) and not self.handle_key(event.key):
                logger.info("Quit requested")
                return
    
    def draw(self) -> None:
        render(self._terminal, self.record_type, self.state, self.records, self._notice_ttl)
    
    def handle_key(self, key: str) -> bool:
        """Apply one key press. Returns False when the dashboard should exit."""
        command = self._commands.get(key)
        if key == "ctrl+c" or command == Command.QUIT:
            return False
        try:
            if command == Command.HOME:
                self.state.active_view = View.HOME
            elif command == Command.DATA:
                self.state.active_view = View.DATA_LIST
            elif command == Command.ADD:
                self._add()
            elif command == Command.DELETE:
                self._delete()
            elif command == Command.EDIT:
                self._edit()
            elif key == "down":
                self._move(1)
            elif key == "up":
                self._move(-1)
            elif key == "left":
                self._shift_age(-1)
            elif key == "right":
                self._shift_age(1)
        except StoreError as exc:
            logger.exception(f"Store operation failed for key {key!r}")
            self.state.set_notice(f"Store error: {exc}")
        except IndexError:
            # Store shrank underneath us
            logger.warning(f"Selection {self.state.selection} missing from {self.store.path}")
            self.state.set_notice(f"Selected {self.record_type.kind_name()} no longer exists")
            self._resync()
        return True
    
    def reload(self) -> None:
        self.records = self.store.read_all()
        self.state.clamp_selection(len(self.records))
    
    def _resync(self) -> None:
        try:
            self.reload()
        except StoreError as exc:
            logger.error(f"Reload after failed command also failed: {exc}")
            self.state.clamp_selection(len(self.records))
    
    def _require_selection(self, action: str) -> bool:
        if self.state.has_selection(len(self.records)):
            return True
        self.state.set_notice(f"No {self.record_type.kind_name()} to {action}")
        return False
    
    def _add(self) -> None:
        placeholder = self.record_type.create_placeholder()
        self.store.append(placeholder)
        self.reload()
        logger.info(f"Added {self.record_type.kind_name()} {placeholder.display_name()!r}")
    
    def _delete(self) -> None:
        if not self._require_selection("delete"):
            return
        selected = self.state.selection
        self.store.remove_at(selected)
        self.reload()
        self.state.selection = max(selected - 1, 0)
        self.state.clamp_selection(len(self.records))
    
    def _move(self, step: int) -> None:
        count = len(self.records)
        if not self._require_selection("select"):
            return
        self.state.selection = (self.state.selection + step + count) % count
    
    def _edit(self) -> None:
        if not self._require_selection("rename"):
            return
        selected = self.state.selection
        record = self.records[selected]
        previous = record.display_name()
        
        def preview(buffer: str) -> None:
            record.set_display_name(buffer)
            self.draw()
        
        new_name = edit_text(self._channel, preview)
        if not new_name:
            new_name = random_name()
        try:
            self.store.update_at(selected, lambda stored: stored.set_display_name(new_name))
        except (StoreError, IndexError):
            record.set_display_name(previous)
            raise
        record.set_display_name(new_name)
        logger.info(f"Renamed {self.record_type.kind_name()} {previous!r} to {new_name!r}")
    
    def _shift_age(self, delta: int) -> None:
        if not issubclass(self.record_type, Ageable):
            return
        if not self._require_selection("age"):
            return
        selected = self.state.selection
        
        def change(stored: R) -> None:
            if delta > 0:
                stored.increment_age(delta)
            else:
                stored.decrement_age(-delta)
        
        updated = self.store.update_at(selected, change)
        self.records[selected].set_age(updated.age)
