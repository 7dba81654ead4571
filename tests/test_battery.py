import pytest

from soundthemed.battery import (
    BatteryTracker,
    find_battery,
    is_discharging,
    read_capacity,
)
from soundthemed.sound_ids import EventKind, SoundEvent

LOW = SoundEvent(EventKind.BATTERY_LOW)
CRITICAL = SoundEvent(EventKind.BATTERY_CRITICAL)


def _supply(root, name, kind):
    path = root / name
    path.mkdir(parents=True)
    (path / "type").write_text(kind + "\n")
    return path


def test_find_battery_picks_battery_type(tmp_path):
    _supply(tmp_path, "AC", "Mains")
    bat = _supply(tmp_path, "BAT0", "Battery")
    assert find_battery(tmp_path) == bat


def test_find_battery_none(tmp_path):
    _supply(tmp_path, "AC", "Mains")
    assert find_battery(tmp_path) is None
    assert find_battery(tmp_path / "missing") is None


@pytest.mark.parametrize(
    "content, expected",
    [("42\n", 42), ("100", 100), ("abc", None), ("-1", None), ("300", None)],
)
def test_read_capacity(tmp_path, content, expected):
    (tmp_path / "capacity").write_text(content)
    assert read_capacity(tmp_path) == expected


def test_read_capacity_missing(tmp_path):
    assert read_capacity(tmp_path) is None


@pytest.mark.parametrize(
    "status, expected",
    [("Discharging\n", True), ("Not charging", True), ("Charging", False), ("Full", False)],
)
def test_is_discharging(tmp_path, status, expected):
    (tmp_path / "status").write_text(status)
    assert is_discharging(tmp_path) is expected


def test_is_discharging_missing(tmp_path):
    assert is_discharging(tmp_path) is False


def test_low_fires_once():
    tracker = BatteryTracker(15, 5)
    assert tracker.update(True, 14) == LOW
    assert tracker.update(True, 13) is None


def test_critical_after_low():
    tracker = BatteryTracker(15, 5)
    assert tracker.update(True, 14) == LOW
    assert tracker.update(True, 4) == CRITICAL
    assert tracker.update(True, 3) is None


def test_critical_first_then_low_on_next_reading():
    tracker = BatteryTracker(15, 5)
    assert tracker.update(True, 3) == CRITICAL
    assert tracker.update(True, 3) == LOW
    assert tracker.update(True, 3) is None


def test_charging_resets():
    tracker = BatteryTracker(15, 5)
    assert tracker.update(True, 10) == LOW
    assert tracker.update(False, 10) is None
    assert tracker.update(True, 10) == LOW


def test_recovery_above_low_resets():
    tracker = BatteryTracker(15, 5)
    assert tracker.update(True, 14) == LOW
    assert tracker.update(True, 20) is None
    assert tracker.update(True, 14) == LOW


def test_unknown_percent_is_ignored():
    tracker = BatteryTracker(15, 5)
    assert tracker.update(True, None) is None
    assert tracker.fired_low is False