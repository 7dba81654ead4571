import asyncio

import pytest

from soundthemed.niri import UrgencyTracker, parse_window_event, watch


def test_parse_urgent_window():
    line = (
        'Window opened or changed: Window { id: 12, title: Some("term"), '
        "workspace_id: Some(3), is_urgent: true }"
    )
    assert parse_window_event(line) == (12, True)


def test_parse_non_urgent_window():
    line = "Window opened or changed: Window { id: 7, workspace_id: Some(9), is_urgent: false }"
    assert parse_window_event(line) == (7, False)


@pytest.mark.parametrize(
    "line",
    [
        "Windows changed: [Window { id: 1, is_urgent: true }]",
        "Window opened or changed: something else",
        "Window opened or changed: Window { id: abc, is_urgent: true }",
        "Workspace focused: 2",
    ],
)
def test_parse_ignores_other_lines(line):
    assert parse_window_event(line) is None


def test_tracker_fires_on_transition_only():
    tracker = UrgencyTracker()
    assert tracker.feed(1, True) is True
    assert tracker.feed(1, True) is False
    assert tracker.feed(2, True) is True
    assert tracker.feed(1, False) is False
    assert tracker.feed(1, True) is True
    assert tracker.urgent == {1, 2}


@pytest.mark.asyncio
async def test_watch_skips_when_not_niri(monkeypatch):
    monkeypatch.setenv("XDG_CURRENT_DESKTOP", "GNOME")
    queue = asyncio.Queue()
    await asyncio.wait_for(watch(queue), timeout=5)
    assert queue.empty()