"""Full-screen terminal surface with guaranteed restoration on exit."""

from __future__ import annotations

import os
import sys

from rich.console import Console, RenderableType
from rich.live import Live
from rich.text import Text

from common.logging_setup import get_logger
from ui_service.errors import TerminalError

__all__ = ["Terminal"]

logger = get_logger(__name__)


class Terminal:
    """
    Raw-mode keyboard plus an alternate-screen ``rich`` Live display.
    
    Use as a context manager: leaving the block restores the terminal
    attributes, the cursor and the screen whether it exits normally or by
    an exception.
    """
    
    def __init__(self, console: Console | None = None, raw_mode: bool = True) -> None:
        self.console = console or Console()
        self._raw_mode = raw_mode
        self._live: Live | None = None
        self._saved_attrs = None
        self._fd: int | None = None
    
    def __enter__(self) -> "Terminal":
        try:
            self._enter_raw_mode()
            self.console.clear()
            self.console.show_cursor(False)
            self._live = Live(
                Text(""),
                console=self.console,
                screen=True,
                auto_refresh=False,
            )
            self._live.start()
        except Exception as exc:
            self.restore()
            raise TerminalError(f"cannot acquire terminal: {exc}") from exc
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
    
    def draw(self, renderable: RenderableType) -> None:
        if self._live is None:
            raise TerminalError("terminal is not active")
        try:
            self._live.update(renderable, refresh=True)
        except OSError as exc:
            raise TerminalError(f"cannot draw to terminal: {exc}") from exc
    
    def restore(self) -> None:
        """Undo everything ``__enter__`` did. Safe to call more than once."""
        if self._live is not None:
            try:
                self._live.stop()
            except Exception as exc:
                logger.warning(f"Failed to stop live display: {exc}")
            self._live = None
        self._leave_raw_mode()
        self.console.show_cursor(True)
        self.console.clear()
    
    def _enter_raw_mode(self) -> None:
        if not self._raw_mode or os.name == "nt":
            return
        import termios
        import tty

        self._fd = sys.stdin.fileno()
        self._saved_attrs = termios.tcgetattr(self._fd)
        tty.setraw(self._fd)
    
    def _leave_raw_mode(self) -> None:
        if self._saved_attrs is None or self._fd is None:
            return
        import termios

        termios.tcsetattr(self._fd, termios.TCSADRAIN, self._saved_attrs)
        self._saved_attrs = None
