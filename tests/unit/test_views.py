"""Unit tests for the dashboard's rich renderables."""

import logging

import pytest
from rich.console import Console
from rich.panel import Panel

from tests.unit.fakes.fake_provider import make_instance

from g1c.constants import InstanceStatus, Mode
from g1c.core.state import DashboardState
from g1c.tui import views


def render_text(renderable) -> str:
    console = Console(width=140, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


@pytest.fixture
def loaded_state(state):
    state.update_cloud_info("my-project", "us-central1", "Google Cloud SDK 470.0.0")
    return state


def test_title():
    assert "Google Cloud Instances" in views.render_title().plain


def test_filter_bar_modes(state):
    assert "Press 'f' to filter" in views.render_filter_bar(state).plain

    state.set_mode(Mode.FILTER_INPUT)
    state.handle_key("w")
    assert views.render_filter_bar(state).plain == "🔍 Filter: w█"

    state.set_mode(Mode.SEARCH_INPUT)
    state.handle_key("d")
    assert views.render_filter_bar(state).plain == "🔎 Search: d█"


def test_overview_shows_cloud_info_and_counts(loaded_state):
    text = render_text(views.render_overview(loaded_state))

    assert "my-project" in text
    assert "us-central1" in text
    assert "Google Cloud SDK 470.0.0" in text
    assert "Running: 2" in text
    assert "Stopped: 1" in text
    assert "Other: 0" in text


def test_overview_shows_filtered_count(loaded_state):
    loaded_state.set_mode(Mode.FILTER_INPUT)
    loaded_state.handle_key("d")
    loaded_state.handle_key("b")

    assert "1 of 3" in render_text(views.render_overview(loaded_state))


def test_instance_table_lists_rows_and_marks_selection(loaded_state):
    loaded_state.handle_key("down")

    text = render_text(views.render_instance_table(loaded_state))

    assert "web-a" in text
    assert "db-c" in text
    assert "n2-standard-4" in text
    assert "10.0.0.2" in text
    selected_line = next(line for line in text.splitlines() if "➤" in line)
    assert "web-b" in selected_line


def test_instance_table_empty(loaded_state):
    loaded_state.update_instances([])

    assert "No instances found" in render_text(views.render_instance_table(loaded_state))


def test_status_bar_prefers_error(loaded_state):
    loaded_state.status_message = "Stop completed for 102"
    assert "Stop completed for 102" in views.render_status_bar(loaded_state).plain

    loaded_state.last_error = "Refresh failed: boom"
    plain = views.render_status_bar(loaded_state).plain

    assert "Refresh failed: boom" in plain
    assert "Stop completed" not in plain
    assert "web-a (101)" in plain


def test_status_bar_without_selection():
    assert "No instances selected" in views.render_status_bar(DashboardState()).plain


def test_help_lists_key_bindings():
    text = render_text(views.render_help())

    for section, _ in views.HELP_SECTIONS:
        assert section in text

    assert "Restart (reset) selected instance" in text


def test_details_popup_contents():
    instance = make_instance(
        "web-1",
        InstanceStatus.RUNNING,
        "555",
        description="frontend box",
        metadata={"env": "prod"},
        tags=["http-server"],
        external_ip="34.1.2.3",
    )

    panel = views.render_details(instance)
    text = render_text(panel)

    assert isinstance(panel, Panel)
    assert "Instance Details: web-1" in text
    assert "frontend box" in text
    assert "env" in text and "prod" in text
    assert "http-server" in text
    assert "34.1.2.3" in text


def test_details_popup_placeholders():
    text = render_text(views.render_details(make_instance("bare", InstanceStatus.UNKNOWN)))

    assert "No description available" in text
    assert "No metadata available" in text


@pytest.mark.parametrize(
    "total,selected,capacity,expected",
    [
        (3, 2, None, (0, 3)),
        (3, 2, 10, (0, 3)),
        (60, 0, 16, (0, 16)),
        (60, 59, 16, (44, 60)),
        (60, 30, 16, (22, 38)),
        (60, 5, 1, (5, 6)),
    ],
)
def test_visible_window_keeps_selection_in_view(total, selected, capacity, expected):
    start, end = views.visible_window(total, selected, capacity)

    assert (start, end) == expected
    assert start <= selected < end


def test_long_instance_table_is_windowed_around_selection():
    state = DashboardState()
    state.update_instances([make_instance(f"vm-{n:03d}", instance_id=str(n)) for n in range(60)])
    state.handle_key("up")

    text = render_text(views.render_instance_table(state, max_rows=10))

    assert "vm-059" in text
    assert "vm-050" in text
    assert "vm-049" not in text
    assert "51-60 of 60" in text
    selected_line = next(line for line in text.splitlines() if "➤" in line)
    assert "vm-059" in selected_line


def test_status_bar_shows_logged_warning(loaded_state):
    loaded_state.status_message = "Stop completed for 102"
    loaded_state.show_log_message("Disk almost full", logging.WARNING)

    plain = views.render_status_bar(loaded_state).plain

    assert "Disk almost full" in plain
    assert "Stop completed" not in plain


def test_help_header_names_the_tool():
    assert "G1C - Google Cloud Instances" in render_text(views.render_help())
