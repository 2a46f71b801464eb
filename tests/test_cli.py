"""Tests for the command-line entry point and terminal surface."""

from __future__ import annotations

import io
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from rich.console import Console
from rich.text import Text

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import cli
from common.config import Config
from ui_service.errors import TerminalError
from ui_service.events import KeyPress
from ui_service.terminal import Terminal


class FakePump:
    """Stands in for InputPump: replays keys and records start()."""
    
    def __init__(self, key_source, tick_rate):
        self.tick_rate = tick_rate
        self.started = False
        self.events = [KeyPress("a"), KeyPress("q")]
    
    def start(self):
        self.started = True
    
    def recv(self):
        return self.events.pop(0)


@pytest.fixture
def fake_terminal():
    terminal = MagicMock()
    terminal.__enter__.return_value = terminal
    terminal.__exit__.return_value = None
    return terminal


def test_parse_args_defaults():
    config = cli.parse_args([])
    assert config == Config()


def test_parse_args_overrides():
    config = cli.parse_args(
        ["--db", "x.json", "--kind", "child", "--tick-rate", "50", "--log-level", "DEBUG"]
    )
    assert config.db_path == "x.json"
    assert config.record_kind == "child"
    assert config.tick_rate == 0.05
    assert config.log_level == "DEBUG"


def test_parse_args_rejects_unknown_kind():
    with pytest.raises(SystemExit):
        cli.parse_args(["--kind", "dragon"])


def test_run_creates_store_and_exits_cleanly(tmp_path, fake_terminal):
    """Test a normal quit restores the terminal, clears the screen and returns 0."""
    db = tmp_path / "data" / "db.json"
    with patch.object(cli, "Terminal", return_value=fake_terminal), \
            patch.object(cli, "InputPump", FakePump), \
            patch.object(cli, "default_key_source"), \
            patch.object(cli, "clear_screen") as clear_screen:
        code = cli.run(Config(db_path=str(db)))
    assert code == 0
    assert fake_terminal.__exit__.called
    clear_screen.assert_called_once()
    assert db.exists()
    assert '"name"' in db.read_text(encoding="utf-8")


def test_run_fatal_error_returns_one(tmp_path, fake_terminal, capsys):
    """Test a broken store ends the run with exit code 1 after terminal restore."""
    db = tmp_path / "db.json"
    db.write_text("not json", encoding="utf-8")
    with patch.object(cli, "Terminal", return_value=fake_terminal), \
            patch.object(cli, "InputPump", FakePump), \
            patch.object(cli, "default_key_source"), \
            patch.object(cli, "clear_screen") as clear_screen:
        code = cli.run(Config(db_path=str(db)))
    assert code == 1
    assert fake_terminal.__exit__.called
    clear_screen.assert_not_called()
    assert "Error:" in capsys.readouterr().err


def test_run_store_not_utf8_returns_one(tmp_path, fake_terminal, capsys):
    db = tmp_path / "db.json"
    db.write_bytes(b"[\xff]")
    with patch.object(cli, "Terminal", return_value=fake_terminal), \
            patch.object(cli, "InputPump", FakePump), \
            patch.object(cli, "default_key_source"), \
            patch.object(cli, "clear_screen"):
        code = cli.run(Config(db_path=str(db)))
    assert code == 1
    assert "Error:" in capsys.readouterr().err


def test_terminal_draw_and_restore():
    console = Console(file=io.StringIO(), force_terminal=False, width=40, height=10)
    with Terminal(console=console, raw_mode=False) as terminal:
        terminal.draw(Text("hello"))
    with pytest.raises(TerminalError):
        terminal.draw(Text("late"))


def test_terminal_restores_on_exception():
    """Test leaving the block through an exception still restores the terminal."""
    console = Console(file=io.StringIO(), force_terminal=False, width=40, height=10)
    terminal = Terminal(console=console, raw_mode=False)
    with pytest.raises(RuntimeError):
        with terminal:
            raise RuntimeError("boom")
    with pytest.raises(TerminalError):
        terminal.draw(Text("after"))
