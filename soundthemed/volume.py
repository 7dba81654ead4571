"""Volume change detection by polling WirePlumber's wpctl.

A change plays a sound at most once per cooldown, and not while a media
player is playing.
"""

from __future__ import annotations

import asyncio
import logging

from soundthemed.sound_ids import EventKind, SoundEvent

log = logging.getLogger(__name__)

POLL_INTERVAL = 0.02
COOLDOWN = 0.02
_PREFIX = "Volume: "


def parse_volume(text: str) -> str | None:
    """The volume part of wpctl's ``Volume: ...`` output."""
    if not text.startswith(_PREFIX):
        return None
    return text[len(_PREFIX):].strip()


async def _run(*args: str) -> tuple[int, bytes] | None:
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError:
        return None
    stdout, _ = await process.communicate()
    return process.returncode, stdout


async def get_volume() -> str | None:
    """The default sink's current volume as reported by wpctl."""
    result = await _run("wpctl", "get-volume", "@DEFAULT_AUDIO_SINK@")
    if result is None or result[0] != 0:
        return None
    try:
        text = result[1].decode("utf-8")
    except UnicodeDecodeError:
        return None
    return parse_volume(text)


async def is_media_playing() -> bool:
    """Whether any media player reports that it is playing."""
    result = await _run("playerctl", "-a", "status")
    if result is None or result[0] != 0:
        return False
    statuses = result[1].decode("utf-8", "replace")
    return any(line.strip() == "Playing" for line in statuses.splitlines())


async def watch(queue: asyncio.Queue) -> None:
    """Queue a volume-change event whenever the sink volume changes."""
    log.info("volume: watching via wpctl polling")
    loop = asyncio.get_running_loop()

    last_volume = await get_volume()
    last_sound = loop.time() - COOLDOWN
    next_tick = loop.time()

    while True:
        next_tick += POLL_INTERVAL
        delay = next_tick - loop.time()
        if delay > 0:
            await asyncio.sleep(delay)
        else:
            next_tick = loop.time()

        current = await get_volume()
        if current == last_volume:
            continue
        last_volume = current

        now = loop.time()
        if now - last_sound >= COOLDOWN and not await is_media_playing():
            last_sound = now
            log.debug("volume: change detected, playing sound")
            await queue.put(SoundEvent(EventKind.AUDIO_VOLUME_CHANGE))