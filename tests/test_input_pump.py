"""Tests for the input pump and key sources."""

import unittest
import sys
import os
import threading
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ui_service.errors import ChannelError, TerminalError
from ui_service.events import KeyPress, Tick
from ui_service.input_pump import InputPump, PosixKeySource


class ScriptedKeySource:
    """Key source that yields a fixed list of keys, then idles."""
    
    def __init__(self, keys):
        self._keys = list(keys)
        self._lock = threading.Lock()
    
    def poll(self, timeout):
        with self._lock:
            if self._keys:
                return True
        time.sleep(timeout)
        return False
    
    def read_key(self):
        with self._lock:
            return self._keys.pop(0)


class BrokenKeySource:
    def poll(self, timeout):
        raise OSError("terminal gone")
    
    def read_key(self):
        return None


class VanishingKeySource:
    """Ends the pump thread without reporting a failure."""
    
    def poll(self, timeout):
        raise SystemExit()
    
    def read_key(self):
        return None


def collect(pump, count, timeout=2.0):
    events = []
    deadline = time.monotonic() + timeout
    while len(events) < count and time.monotonic() < deadline:
        events.append(pump.recv())
    return events


class TestInputPump(unittest.TestCase):
    """Test InputPump event production."""
    
    def test_keys_arrive_in_order(self):
        """Test key presses are delivered in the order read."""
        pump = InputPump(ScriptedKeySource(["a", "b", "up"]), tick_rate=0.05)
        pump.start()
        events = collect(pump, 8)
        keys = [event.key for event in events if isinstance(event, KeyPress)]
        self.assertEqual(keys, ["a", "b", "up"])
    
    def test_ticks_without_input(self):
        """Test ticks keep coming when no key is pressed."""
        pump = InputPump(ScriptedKeySource([]), tick_rate=0.01)
        pump.start()
        events = collect(pump, 3)
        self.assertEqual(len(events), 3)
        self.assertTrue(all(isinstance(event, Tick) for event in events))
    
    def test_none_keys_are_dropped(self):
        pump = InputPump(ScriptedKeySource([None, "x"]), tick_rate=0.05)
        pump.start()
        events = collect(pump, 3)
        keys = [event.key for event in events if isinstance(event, KeyPress)]
        self.assertEqual(keys, ["x"])
    
    def test_keyboard_failure_is_terminal_error(self):
        """Test a failing key source surfaces as a fatal TerminalError."""
        pump = InputPump(BrokenKeySource(), tick_rate=0.01)
        pump.start()
        with self.assertRaises(TerminalError):
            pump.recv()
    
    def test_dead_pump_is_channel_error(self):
        """Test recv notices the pump thread is gone."""
        pump = InputPump(VanishingKeySource(), tick_rate=0.01, liveness_interval=0.05)
        pump.start()
        with self.assertRaises(ChannelError):
            pump.recv()


@unittest.skipIf(os.name == "nt", "POSIX key source only")
class TestPosixKeySource(unittest.TestCase):
    """Test decoding of raw terminal bytes."""
    
    def setUp(self):
        self.read_fd, self.write_fd = os.pipe()
        self.source = PosixKeySource(self.read_fd)
    
    def tearDown(self):
        os.close(self.read_fd)
        os.close(self.write_fd)
    
    def feed(self, data):
        os.write(self.write_fd, data)
    
    def test_poll_without_input(self):
        self.assertFalse(self.source.poll(0.01))
    
    def test_plain_character(self):
        self.feed(b"x")
        self.assertTrue(self.source.poll(0.1))
        self.assertEqual(self.source.read_key(), "x")
    
    def test_multibyte_character(self):
        """Test a non-ASCII key arrives as one character."""
        self.feed("é€".encode("utf-8"))
        self.assertEqual(self.source.read_key(), "é")
        self.assertEqual(self.source.read_key(), "€")
        self.assertFalse(self.source.poll(0.01))
    
    def test_invalid_byte_is_replaced(self):
        self.feed(b"\xffx")
        self.assertEqual(self.source.read_key(), "\ufffd")
        self.assertEqual(self.source.read_key(), "x")
    
    def test_long_sequences_are_drained(self):
        """Test Delete and Shift+Up leave no trailing bytes behind."""
        self.feed(b"\x1b[3~")
        self.assertEqual(self.source.read_key(), "delete")
        self.assertFalse(self.source.poll(0.01))
        self.feed(b"\x1b[1;2A")
        self.assertEqual(self.source.read_key(), "up")
        self.assertFalse(self.source.poll(0.01))
    
    def test_page_keys(self):
        self.feed(b"\x1b[5~\x1b[6~")
        self.assertEqual(self.source.read_key(), "pgup")
        self.assertEqual(self.source.read_key(), "pgdn")
    
    def test_application_mode_arrows(self):
        self.feed(b"\x1bOA")
        self.assertEqual(self.source.read_key(), "up")
    
    def test_arrow_keys(self):
        """Test escape sequences decode to arrow names."""
        for data, name in ((b"\x1b[A", "up"), (b"\x1b[B", "down"), (b"\x1b[C", "right"), (b"\x1b[D", "left")):
            self.feed(data)
            self.assertEqual(self.source.read_key(), name)
    
    def test_lone_escape(self):
        self.feed(b"\x1b")
        self.assertEqual(self.source.read_key(), "esc")
    
    def test_control_keys(self):
        self.feed(b"\r\x7f\x03\t")
        self.assertEqual(self.source.read_key(), "enter")
        self.assertEqual(self.source.read_key(), "backspace")
        self.assertEqual(self.source.read_key(), "ctrl+c")
        self.assertEqual(self.source.read_key(), "tab")
    
    def test_closed_input_raises(self):
        os.close(self.write_fd)
        self.write_fd = os.open(os.devnull, os.O_WRONLY)
        with self.assertRaises(EOFError):
            self.source.read_key()


if __name__ == "__main__":
    unittest.main()
