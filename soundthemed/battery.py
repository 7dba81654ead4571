"""Battery level monitoring through /sys/class/power_supply.

Only the charge percentage is watched here; charger plug and unplug
events come from the udev monitor.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from soundthemed.sound_ids import EventKind, SoundEvent

log = logging.getLogger(__name__)

POLL_INTERVAL = 60.0
POWER_SUPPLY_DIR = Path("/sys/class/power_supply")


def _read_sysfs(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError):
        return None


def find_battery(root: Path | str = POWER_SUPPLY_DIR) -> Path | None:
    """The first power supply under ``root`` whose type is Battery."""
    try:
        entries = sorted(Path(root).iterdir())
    except OSError:
        return None
    for entry in entries:
        if _read_sysfs(entry / "type") == "Battery":
            return entry
    return None


def read_capacity(battery_path: Path | str) -> int | None:
    """The battery's charge percentage, or None if unreadable."""
    text = _read_sysfs(Path(battery_path) / "capacity")
    if text is None:
        return None
    digits = text.removeprefix("+")
    if not digits.isascii() or not digits.isdigit():
        return None
    value = int(digits)
    return value if value <= 255 else None


def is_discharging(battery_path: Path | str) -> bool:
    """Whether the battery is running down."""
    status = _read_sysfs(Path(battery_path) / "status")
    return status in ("Discharging", "Not charging")


@dataclass
class BatteryTracker:
    """Decides when low and critical warnings fire, once per discharge."""

    low_pct: int
    crit_pct: int
    fired_low: bool = False
    fired_critical: bool = False

    def update(self, discharging: bool, percent: int | None) -> SoundEvent | None:
        """Feed one reading; return the event to play, if any."""
        if not discharging:
            self.fired_low = False
            self.fired_critical = False
            return None
        if percent is None:
            return None

        event = None
        if percent <= self.crit_pct and not self.fired_critical:
            log.warning("battery: critical (%d%%)", percent)
            self.fired_critical = True
            event = SoundEvent(EventKind.BATTERY_CRITICAL)
        elif percent <= self.low_pct and not self.fired_low:
            log.warning("battery: low (%d%%)", percent)
            self.fired_low = True
            event = SoundEvent(EventKind.BATTERY_LOW)

        if percent > self.low_pct:
            self.fired_low = False
            self.fired_critical = False
        return event


async def watch(queue: asyncio.Queue, low_pct: int, crit_pct: int) -> None:
    """Poll the battery and queue low and critical events."""
    battery = find_battery()
    if battery is None:
        log.info("battery: no battery found, skipping monitor")
        return
    log.info("battery: monitoring %s", battery)

    tracker = BatteryTracker(low_pct, crit_pct)
    while True:
        discharging = is_discharging(battery)
        percent = read_capacity(battery) if discharging else None
        event = tracker.update(discharging, percent)
        if event is not None:
            await queue.put(event)
        await asyncio.sleep(POLL_INTERVAL)