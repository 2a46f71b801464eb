"""Tests for the inline text-edit loop."""

import unittest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ui_service.events import KeyPress, Tick
from ui_service.text_edit import edit_text


class ScriptedChannel:
    def __init__(self, events):
        self.events = list(events)
    
    def recv(self):
        return self.events.pop(0)


def keys(*names):
    return [KeyPress(name) for name in names]


class TestEditText(unittest.TestCase):
    """Test buffer handling in edit_text."""
    
    def setUp(self):
        self.previews = []
    
    def edit(self, events):
        self.channel = ScriptedChannel(events)
        return edit_text(self.channel, self.previews.append)
    
    def test_alphanumeric_appends_until_enter(self):
        self.assertEqual(self.edit(keys("R", "o", "v", "e", "r", "enter")), "Rover")
    
    def test_digits_are_accepted(self):
        self.assertEqual(self.edit(keys("a", "1", "2", "esc")), "a12")
    
    def test_backspace_removes_last(self):
        self.assertEqual(self.edit(keys("a", "b", "backspace", "c", "enter")), "ac")
    
    def test_backspace_on_empty_buffer(self):
        """Test backspace on an empty buffer is a no-op."""
        self.assertEqual(self.edit(keys("backspace", "backspace", "x", "enter")), "x")
    
    def test_punctuation_terminates_and_is_discarded(self):
        """Test a non-alphanumeric character ends editing without being consumed into the buffer."""
        result = self.edit(keys("a", "!", "b"))
        self.assertEqual(result, "a")
        self.assertEqual(self.channel.events, keys("b"))
    
    def test_non_ascii_letters_are_accepted(self):
        self.assertEqual(self.edit(keys("Z", "o", "é", "б", "enter")), "Zoéб")
    
    def test_space_terminates(self):
        self.assertEqual(self.edit(keys("a", " ", "b")), "a")
    
    def test_arrow_terminates(self):
        self.assertEqual(self.edit(keys("a", "left")), "a")
    
    def test_empty_result(self):
        self.assertEqual(self.edit(keys("enter")), "")
    
    def test_tick_previews_current_buffer(self):
        """Test each tick hands the buffer to the preview callback."""
        events = [Tick(), KeyPress("a"), Tick(), KeyPress("b"), Tick(), KeyPress("enter")]
        self.assertEqual(self.edit(events), "ab")
        self.assertEqual(self.previews, ["", "a", "ab"])


if __name__ == "__main__":
    unittest.main()
