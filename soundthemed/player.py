"""Sound playback through pw-play."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

log = logging.getLogger(__name__)

PLAYER = "pw-play"

_reapers: set[asyncio.Task] = set()


async def play(path: Path | str) -> asyncio.subprocess.Process | None:
    """Start playing a file without waiting for it to finish.

    Returns the player process, or None if it could not be started.
    Overlapping calls play at the same time.
    """
    log.info("playing: %s", path)
    try:
        process = await asyncio.create_subprocess_exec(PLAYER, str(path))
    except OSError as exc:
        log.error("failed to spawn %s: %s", PLAYER, exc)
        return None
    reaper = asyncio.create_task(process.wait())
    _reapers.add(reaper)
    reaper.add_done_callback(_reapers.discard)
    return process


async def play_and_wait(path: Path | str) -> int | None:
    """Play a file and wait until playback ends.

    Returns the player's exit code, or None if it could not be run.
    """
    log.info("playing (blocking): %s", path)
    try:
        process = await asyncio.create_subprocess_exec(
            PLAYER,
            str(path),
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        log.error("failed to play: %s", exc)
        return None
    await process.communicate()
    return process.returncode