"""Background producer turning keyboard input and a clock into one event stream."""

from __future__ import annotations

import codecs
import os
import queue
import sys
import threading
import time
from typing import Protocol

from common.logging_setup import get_logger
from ui_service.errors import ChannelError, TerminalError
from ui_service.events import InputEvent, KeyPress, Tick

__all__ = [
    "InputPump",
    "KeySource",
    "PosixKeySource",
    "WindowsKeySource",
    "default_key_source",
]

logger = get_logger(__name__)

DEFAULT_TICK_RATE = 0.2


class KeySource(Protocol):
    def poll(self, timeout: float) -> bool:
        """Wait up to ``timeout`` seconds for a key; True if one is ready."""
        ...

    def read_key(self) -> str | None:
        """Read one normalized key, or None for input that maps to nothing."""
        ...


class _PumpFailure:
    def __init__(self, error: BaseException) -> None:
        self.error = error


class InputPump:
    """
    Daemon thread that forwards key presses and periodic ticks.
    
    The thread is never stopped cooperatively; it is abandoned at process
    exit. Any failure to poll or read the keyboard ends the thread and is
    re-raised as TerminalError by the next ``recv()``.
    """
    
    def __init__(
        self,
        key_source: KeySource,
        tick_rate: float = DEFAULT_TICK_RATE,
        liveness_interval: float = 1.0,
    ) -> None:
        self._key_source = key_source
        self._tick_rate = tick_rate
        self._liveness_interval = liveness_interval
        self._queue: queue.Queue[InputEvent | _PumpFailure] = queue.Queue()
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="ui-input-pump",
        )
    
    def start(self) -> None:
        self._thread.start()
    
    def recv(self) -> InputEvent:
        """Block until the next event arrives."""
        while True:
            try:
                item = self._queue.get(timeout=self._liveness_interval)
            except queue.Empty:
                if not self._thread.is_alive():
                    raise ChannelError("input pump is no longer running")
                continue
            if isinstance(item, _PumpFailure):
                raise TerminalError(f"cannot read keyboard input: {item.error}") from item.error
            return item
    
    def _run(self) -> None:
        last_tick = time.monotonic()
        try:
            while True:
                timeout = max(0.0, self._tick_rate - (time.monotonic() - last_tick))
                if self._key_source.poll(timeout):
                    key = self._key_source.read_key()
                    if key:
                        self._queue.put(KeyPress(key))
                if time.monotonic() - last_tick >= self._tick_rate:
                    self._queue.put(Tick())
                    last_tick = time.monotonic()
        except Exception as exc:
            logger.error(f"Input pump failed: {exc}")
            self._queue.put(_PumpFailure(exc))


class PosixKeySource:
    """Reads keys from a terminal file descriptor already put in raw mode."""
    
    # Final byte of a CSI/SS3 sequence, parameters such as "1;2" ignored
    _ARROWS = {
        "A": "up",
        "B": "down",
        "C": "right",
        "D": "left",
    }
    _TILDE_KEYS = {
        "3": "delete",
        "5": "pgup",
        "6": "pgdn",
    }
    _MAX_SEQUENCE = 16
    
    def __init__(self, fd: int | None = None) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd
    
    def poll(self, timeout: float) -> bool:
        import select

        readable, _, _ = select.select([self._fd], [], [], timeout)
        return bool(readable)
    
    def _read_char(self) -> str:
        """Read one character, pulling in continuation bytes of multibyte UTF-8."""
        decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        while True:
            data = os.read(self._fd, 1)
            if not data:
                raise EOFError("keyboard input closed")
            ch = decoder.decode(data)
            if ch:
                return ch
    
    def _read_escape(self) -> str:
        introducer = self._read_char()
        if introducer not in ("[", "O"):
            return "esc"
        body = ""
        while len(body) < self._MAX_SEQUENCE and self.poll(0.05):
            ch = self._read_char()
            body += ch
            if "@" <= ch <= "~":
                break
        if not body:
            return "esc"
        final = body[-1]
        if final in self._ARROWS:
            return self._ARROWS[final]
        if final == "~":
            return self._TILDE_KEYS.get(body[:-1], "esc")
        return "esc"
    
    def read_key(self) -> str | None:
        ch = self._read_char()
        if ch == "\x1b":
            if not self.poll(0.05):
                return "esc"
            return self._read_escape()
        if ch == "\x03":
            return "ctrl+c"
        if ch in ("\r", "\n"):
            return "enter"
        if ch in ("\x7f", "\x08"):
            return "backspace"
        if ch == "\t":
            return "tab"
        return ch


class WindowsKeySource:
    _SCAN_CODES = {
        "H": "up",
        "P": "down",
        "K": "left",
        "M": "right",
        "I": "pgup",
        "Q": "pgdn",
        "S": "delete",
    }
    
    def poll(self, timeout: float) -> bool:
        import msvcrt

        deadline = time.monotonic() + timeout
        while not msvcrt.kbhit():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            time.sleep(min(0.02, remaining))
        return True
    
    def read_key(self) -> str | None:
        import msvcrt

        ch = msvcrt.getwch()
        if ch in ("\x00", "\xe0"):
            return self._SCAN_CODES.get(msvcrt.getwch())
        if ch == "\x03":
            return "ctrl+c"
        if ch == "\r":
            return "enter"
        if ch == "\x08":
            return "backspace"
        if ch == "\x1b":
            return "esc"
        if ch == "\t":
            return "tab"
        return ch


def default_key_source() -> KeySource:
    if os.name == "nt":
        return WindowsKeySource()
    return PosixKeySource()
