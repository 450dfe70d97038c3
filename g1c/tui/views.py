"""Rich renderables for each dashboard region.

Every function here is a pure mapping from dashboard state to something a
Textual ``Static`` can display.
"""

from __future__ import annotations

import logging

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from g1c.constants import STATUS_ICONS, STATUS_STYLES, Mode
from g1c.core.state import DashboardState
from g1c.models import Instance

TITLE = "🌩️  Google Cloud Instances (G1C)"
EMPTY_PLACEHOLDER = "-"

# Panel borders and the header row around the instance rows.
TABLE_CHROME_ROWS = 3

HELP_SECTIONS = [
    (
        "Navigation",
        [
            ("↑/k", "Move selection up"),
            ("↓/j", "Move selection down"),
            ("Enter", "Show instance details"),
            ("Esc", "Close popup or cancel input"),
        ],
    ),
    (
        "Filtering and Searching",
        [
            ("f", "Toggle filter mode"),
            ("/", "Toggle search mode"),
        ],
    ),
    (
        "Instance Actions",
        [
            ("s", "Start selected instance"),
            ("S", "Stop selected instance"),
            ("R", "Restart (reset) selected instance"),
        ],
    ),
    (
        "Miscellaneous",
        [
            ("r", "Refresh instance data"),
            ("?", "Toggle this help screen"),
            ("q/Ctrl+c", "Quit application"),
        ],
    ),
]


def status_text(instance: Instance) -> Text:
    """Return the icon and status name styled for the status column."""
    return Text(
        f"{STATUS_ICONS[instance.status]} {instance.status.value}",
        style=STATUS_STYLES[instance.status],
    )


def render_title() -> Text:
    return Text(TITLE, style="bold white")


def render_filter_bar(state: DashboardState) -> Text:
    if state.mode is Mode.FILTER_INPUT:
        return Text(f"🔍 Filter: {state.filter_text}█", style="bold yellow")

    if state.mode is Mode.SEARCH_INPUT:
        return Text(f"🔎 Search: {state.search_text}█", style="bold yellow")

    return Text("🔍 Press 'f' to filter, '/' to search", style="grey70")


def render_overview(state: DashboardState) -> Panel:
    running, stopped, other = state.status_counts()
    total = len(state.all_instances)
    shown = len(state.instances)
    count = f"{shown}" if shown == total else f"{shown} of {total}"

    body = Text()
    body.append("🔑 Project ID: ", style="blue")
    body.append(f"{state.project_id or EMPTY_PLACEHOLDER}\n")
    body.append("🌎 Region: ", style="blue")
    body.append(f"{state.region or EMPTY_PLACEHOLDER}\n")
    body.append("🖥️ GCloud CLI: ", style="blue")
    body.append(f"{state.cli_version or 'Unknown'}\n\n")
    body.append("📊 Total Instances: ", style="green")
    body.append(f"{count}\n")
    body.append("🟢 Running: ", style="green")
    body.append(f"{running}  ")
    body.append("🔴 Stopped: ", style="red")
    body.append(f"{stopped}  ")
    body.append("❓ Other: ", style="yellow")
    body.append(f"{other}")

    return Panel(body, title="📈 Overview", border_style="blue")


def visible_window(total: int, selected: int, capacity: int | None) -> tuple[int, int]:
    """Return the ``[start, end)`` slice of rows that fits the list panel.

    The window follows the cursor, keeping it near the middle once the list
    is longer than ``capacity``.

    Parameters
    ----------
    total : int
        Number of displayed instances
    selected : int
        Cursor index
    capacity : int | None
        Rows that fit on screen; None means no limit

    Returns
    -------
    tuple[int, int]
        First row and one past the last row to draw
    """
    if capacity is None or total <= capacity:
        return 0, total

    capacity = max(capacity, 1)
    start = min(max(selected - capacity // 2, 0), total - capacity)
    return start, start + capacity


def render_instance_table(state: DashboardState, max_rows: int | None = None) -> Panel:
    """Render the instance list with the selected row highlighted.

    Parameters
    ----------
    state : DashboardState
        State to draw
    max_rows : int | None
        Instance rows that fit in the panel; longer lists are windowed
        around the selected row
    """
    if not state.instances:
        message = Group(
            Text("No instances found", style="bold yellow"),
            Text("Press 'r' to refresh", style="grey70"),
        )
        return Panel(message, title="💻 Instances List", border_style="cyan")

    table = Table(expand=True, box=None, header_style="bold", pad_edge=False)
    table.add_column("", width=2, no_wrap=True)
    table.add_column("NAME", ratio=3, no_wrap=True, overflow="ellipsis")
    table.add_column("STATUS", ratio=2, no_wrap=True)
    table.add_column("MACHINE TYPE", ratio=2, no_wrap=True, overflow="ellipsis")
    table.add_column("ZONE", ratio=2, no_wrap=True, overflow="ellipsis")
    table.add_column("INTERNAL IP", ratio=2, no_wrap=True)
    table.add_column("EXTERNAL IP", ratio=2, no_wrap=True)

    total = len(state.instances)
    start, end = visible_window(total, state.selected_index, max_rows)

    for index in range(start, end):
        instance = state.instances[index]
        selected = index == state.selected_index
        table.add_row(
            "➤" if selected else "",
            instance.name,
            status_text(instance),
            instance.machine_type,
            instance.zone,
            instance.internal_ip or EMPTY_PLACEHOLDER,
            instance.external_ip or EMPTY_PLACEHOLDER,
            style="bold reverse" if selected else None,
        )

    title = "💻 Instances List"
    if end - start < total:
        title = f"{title} ({start + 1}-{end} of {total})"

    return Panel(table, title=title, border_style="cyan")


def render_status_bar(state: DashboardState) -> Text:
    instance = state.selected_instance
    text = Text()

    if instance is not None:
        text.append(f"🔍 Selected: {instance.name} ({instance.id})")
    else:
        text.append("🔍 No instances selected")

    if state.last_error:
        text.append(" | ")
        text.append(state.last_error, style="bold red")
    elif state.log_message:
        text.append(" | ")
        text.append(
            state.log_message,
            style="bold red" if state.log_level >= logging.ERROR else "yellow",
        )
    elif state.status_message:
        text.append(" | ")
        text.append(state.status_message, style="green")

    text.append(" | ❓ Press '?' for help")
    return text


def render_help() -> Panel:
    body = Text()
    body.append("G1C - Google Cloud Instances\n", style="bold yellow")

    for title, entries in HELP_SECTIONS:
        body.append(f"\n{title}\n", style="bold cyan")

        for key, description in entries:
            body.append(key, style="bold")
            body.append(f" - {description}\n")

    return Panel(body, title="Help", border_style="yellow")


def render_details(instance: Instance) -> Panel:
    """Render the details popup for one instance."""
    basic = Table(title="Basic Info", expand=True, show_header=True, header_style="bold")
    basic.add_column("Property", ratio=3)
    basic.add_column("Value", ratio=7)
    basic.add_row("Status", status_text(instance))
    basic.add_row("Machine Type", instance.machine_type)
    basic.add_row("Zone", instance.zone)
    basic.add_row("External IP", instance.external_ip or "None")
    basic.add_row("Internal IP", instance.internal_ip or "None")
    basic.add_row("Created", instance.creation_timestamp or "Unknown")
    basic.add_row("Tags", ", ".join(instance.tags) if instance.tags else "None")

    description = Text(instance.description or "No description available")

    if instance.metadata:
        metadata = Table(expand=True, show_header=False, box=None)
        metadata.add_column("Key", style="bold")
        metadata.add_column("Value", overflow="fold")

        for key in sorted(instance.metadata):
            metadata.add_row(key, instance.metadata[key])
    else:
        metadata = Text("No metadata available")

    hints = Text()
    hints.append("Press ")
    hints.append("ESC", style="bold")
    hints.append(" to close, ")
    hints.append("s", style="bold")
    hints.append(" to start, ")
    hints.append("S", style="bold")
    hints.append(" to stop, ")
    hints.append("R", style="bold")
    hints.append(" to restart")

    header = Text(
        f"Instance: {instance.name} ({instance.id}) {STATUS_ICONS[instance.status]}",
        style="bold cyan",
    )

    return Panel(
        Group(
            header,
            basic,
            Panel(description, title="Description"),
            Panel(metadata, title="Metadata"),
            hints,
        ),
        title=f"Instance Details: {instance.name}",
        border_style="cyan",
    )
