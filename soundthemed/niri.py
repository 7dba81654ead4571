"""Window urgency (bell) detection from the niri compositor's event stream."""

from __future__ import annotations

import asyncio
import logging
import os

from soundthemed.sound_ids import SoundEvent

log = logging.getLogger(__name__)

_EVENT_PREFIX = "Window opened or changed:"
_ID_MARKER = "Window { id: "
_URGENT_MARKER = "is_urgent: true"
WARMUP = 2.0


def parse_window_event(line: str) -> tuple[int, bool] | None:
    """Extract (window id, is urgent) from a single-window change line."""
    if not line.startswith(_EVENT_PREFIX):
        return None
    pos = line.find(_ID_MARKER)
    if pos < 0:
        return None
    rest = line[pos + len(_ID_MARKER):]
    digits = ""
    for char in rest:
        if not (char.isascii() and char.isdigit()):
            break
        digits += char
    if not digits:
        return None
    window_id = int(digits)
    if window_id >= 2**64:
        return None
    return window_id, _URGENT_MARKER in line


class UrgencyTracker:
    """Remembers urgent windows so a bell fires only on the transition."""

    def __init__(self) -> None:
        self.urgent: set[int] = set()

    def feed(self, window_id: int, is_urgent: bool) -> bool:
        """Record a window's state; True when it has just become urgent."""
        if is_urgent:
            if window_id in self.urgent:
                return False
            self.urgent.add(window_id)
            return True
        self.urgent.discard(window_id)
        return False


async def _watch(queue: asyncio.Queue) -> None:
    if os.environ.get("XDG_CURRENT_DESKTOP") != "niri":
        log.info("niri: not running under niri, skipping")
        return

    process = await asyncio.create_subprocess_exec(
        "niri", "msg", "event-stream",
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.DEVNULL,
    )
    log.info("niri: watching compositor events")
    assert process.stdout is not None

    loop = asyncio.get_running_loop()
    start = loop.time()
    tracker = UrgencyTracker()
    try:
        async for raw in process.stdout:
            parsed = parse_window_event(raw.decode("utf-8", "replace").rstrip("\r\n"))
            if parsed is None or loop.time() - start < WARMUP:
                continue
            window_id, is_urgent = parsed
            if tracker.feed(window_id, is_urgent):
                log.info("niri: window %d became urgent (bell)", window_id)
                await queue.put(SoundEvent.custom("bell"))
    finally:
        if process.returncode is None:
            process.kill()
            await process.wait()


async def watch(queue: asyncio.Queue) -> None:
    """Queue a bell whenever a niri window becomes urgent."""
    try:
        await _watch(queue)
    except (OSError, ValueError) as exc:
        log.error("niri monitor error: %s", exc)