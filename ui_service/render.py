"""Three-pane view of the dashboard built from state and the record list."""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console, ConsoleOptions, RenderableType, RenderResult
from rich.layout import Layout
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from records.base import Command, Record
from ui_service.state import DashboardState, View

__all__ = ["build_view", "create_ui_layout", "render"]

COPYRIGHT_YEAR = "2020"
SELECTED_STYLE = "bold black on yellow"


def create_ui_layout() -> Layout:
    """Create the main UI layout."""
    layout = Layout()
    
    layout.split_column(
        Layout(name="header", size=3),
        Layout(name="body"),
        Layout(name="footer", size=3),
    )
    
    return layout


def build_view(
    record_type: type[Record],
    state: DashboardState,
    records: Sequence[Record],
    notice_ttl: float = 3.0,
    now: float | None = None,
) -> Layout:
    """Build the full screen for the current state. Does not touch the terminal."""
    layout = create_ui_layout()
    layout["header"].update(_render_tabs(record_type, state.active_view))
    if state.active_view == View.DATA_LIST:
        layout["body"].update(_render_data(record_type, state, records))
    else:
        layout["body"].update(_render_home(record_type))
    layout["footer"].update(_render_footer(record_type, state.notice_text(notice_ttl, now)))
    return layout


def render(
    terminal,
    record_type: type[Record],
    state: DashboardState,
    records: Sequence[Record],
    notice_ttl: float = 3.0,
) -> None:
    terminal.draw(build_view(record_type, state, records, notice_ttl))


def _render_tabs(record_type: type[Record], active_view: View) -> Panel:
    labels = record_type.menu_labels()
    active_index = 1 if active_view == View.DATA_LIST else 0
    text = Text()
    for index, label in enumerate(labels):
        if index:
            text.append(" | ", style="white")
        # First letter is the mnemonic key
        text.append(label[:1], style="underline yellow")
        text.append(label[1:], style="bold yellow" if index == active_index else "white")
    return Panel(text, title="Menu", title_align="left", border_style="white")


def _render_home(record_type: type[Record]) -> Panel:
    text = Text(justify="center")
    text.append("\nWelcome\n\nto\n\n")
    text.append(record_type.app_name(), style="bold bright_blue")
    text.append("\n\n")
    for line in record_type.help_text():
        text.append(f"{line}\n")
    return Panel(
        Align.center(text),
        title="Home",
        border_style="white",
    )


class _NameList:
    """Name column that scrolls to keep the selected row inside the pane."""
    
    def __init__(self, names: list[str], selection: int) -> None:
        self.names = names
        self.selection = selection
    
    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        window = options.height or len(self.names)
        start = _clamp_scroll(self.selection - window + 1, len(self.names), window)
        text = Text(no_wrap=True, overflow="ellipsis")
        for index in range(start, min(start + window, len(self.names))):
            if index > start:
                text.append("\n")
            style = SELECTED_STYLE if index == self.selection else ""
            text.append(self.names[index], style=style)
        yield text


def _clamp_scroll(offset: int, total: int, window: int) -> int:
    if total <= window:
        return 0
    max_offset = max(0, total - window)
    return max(0, min(offset, max_offset))


def _render_data(
    record_type: type[Record],
    state: DashboardState,
    records: Sequence[Record],
) -> Layout:
    body = Layout()
    body.split_row(
        Layout(name="list", ratio=1),
        Layout(name="detail", ratio=4),
    )
    names = _NameList([record.display_name() for record in records], state.selection)
    body["list"].update(Panel(names, title=record_type.title(), border_style="white"))
    
    detail: RenderableType
    if state.has_selection(len(records)):
        detail = _render_detail(records[state.selection])
    else:
        detail = _render_empty(record_type)
    body["detail"].update(Panel(detail, title="Detail", border_style="white"))
    return body


def _render_detail(record: Record) -> Table:
    cells = record.render_row()
    table = Table(show_header=True, header_style="bold", expand=True, box=None)
    for cell in cells:
        table.add_column(cell.label, ratio=cell.ratio, no_wrap=True)
    table.add_row(*(cell.value for cell in cells))
    return table


def _render_empty(record_type: type[Record]) -> Text:
    add_key = record_type.key_bindings()[Command.ADD]
    text = Text(justify="center")
    text.append(f"No {record_type.title().lower()} yet.\n", style="bold")
    text.append(f"Press '{add_key}' to add a random {record_type.kind_name()}.", style="dim")
    return text


def _render_footer(record_type: type[Record], notice: str | None) -> Panel:
    text = Text(
        f"{record_type.app_name()} {COPYRIGHT_YEAR} - all rights reserved",
        style="bright_cyan",
        justify="center",
    )
    return Panel(
        text,
        title="Copyright",
        subtitle=Text(notice, style="yellow") if notice else None,
        border_style="white",
    )
