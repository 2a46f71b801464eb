"""Fatal UI failures. Either one ends the dashboard."""

__all__ = ["ChannelError", "TerminalError"]


class TerminalError(Exception):
    """The terminal cannot be acquired, read or drawn to."""


class ChannelError(Exception):
    """The input pump is gone and no more events will arrive."""
