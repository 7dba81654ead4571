"""The sound daemon: event sources in, theme sounds out.

Also the command-line entry point, which can launch the configuration
GUI or build a theme from a folder of audio files instead of running
the daemon.
"""

from __future__ import annotations

import argparse
import asyncio
import functools
import logging
import os
import signal
import sys
from collections.abc import Coroutine, Sequence
from pathlib import Path
from typing import Any

from soundthemed import battery, niri, player, theme, udev_monitor, volume
from soundthemed.config import SILENCED, Config, load, resolve_override
from soundthemed.sound_ids import SoundEvent
from soundthemed.theme_creator import ThemeCreationError, create_theme

log = logging.getLogger(__name__)

QUEUE_SIZE = 32
CONFIG_GUI = "soundthemed-config"
_SPECIAL_SOUNDS = {"startup": "startup_sound", "shutdown": "shutdown_sound"}
_UNAVAILABLE_SOURCES = ("network", "session", "notifications", "dbus_service")


async def dispatch_event(config: Config, event: SoundEvent) -> Path | None:
    """Play the sound for an event, honouring per-event overrides.

    Returns the file that was sent to the player, or None when the event
    is silenced or no sound file exists for it.
    """
    sound_id = event.sound_id()
    log.debug("event: %s", sound_id)

    override = resolve_override(config, sound_id)
    if override is SILENCED:
        log.debug("event silenced by config: %s", sound_id)
        return None
    if isinstance(override, Path):
        await player.play(override)
        return override

    path = theme.resolve(config.theme, sound_id)
    if path is None:
        log.warning("no sound file for: %s", sound_id)
        return None
    await player.play(path)
    return path


async def play_special_sound(config: Config, which: str) -> Path | None:
    """Play the configured startup or shutdown sound.

    The setting may be an absolute file path or a sound ID resolved from
    the active theme. The shutdown sound is waited for. Returns the file
    played, or None when there is nothing to play.
    """
    attribute = _SPECIAL_SOUNDS.get(which)
    if attribute is None:
        return None
    sound: str = getattr(config, attribute)
    if not sound or sound == "none":
        return None

    if sound.startswith("/"):
        path = Path(sound)
    else:
        resolved = theme.resolve(config.theme, sound)
        if resolved is None:
            log.warning("no sound file for %s sound: %s", which, sound)
            return None
        path = resolved

    if which == "shutdown":
        await player.play_and_wait(path)
    else:
        await player.play(path)
    return path


async def _guarded(name: str, coro: Coroutine[Any, Any, None]) -> None:
    try:
        await coro
    except asyncio.CancelledError:
        raise
    except Exception:
        log.exception("%s monitor failed", name)


def _start_sources(config: Config, queue: asyncio.Queue) -> list[asyncio.Task]:
    sources = config.sources
    watchers: dict[str, Coroutine[Any, Any, None]] = {}
    if sources.udev:
        watchers["udev"] = udev_monitor.watch(queue)
    if sources.battery:
        watchers["battery"] = battery.watch(
            queue, config.battery_low_percent, config.battery_critical_percent
        )
    if sources.volume:
        watchers["volume"] = volume.watch(queue)
    watchers["niri"] = niri.watch(queue)

    for name in _UNAVAILABLE_SOURCES:
        if getattr(sources, name):
            log.info("%s event source is not available, skipping", name)

    return [
        asyncio.create_task(_guarded(name, coro), name=f"soundthemed-{name}")
        for name, coro in watchers.items()
    ]


async def run_daemon() -> bool:
    """Run until SIGTERM or SIGINT; SIGHUP reloads the config.

    Returns False at once when sounds are disabled in the config, and
    True after a clean shutdown.
    """
    log.info("soundthemed starting")
    config = load()
    if not config.enabled:
        log.info("sounds disabled in config, exiting")
        return False

    loop = asyncio.get_running_loop()
    stop = asyncio.Event()

    def reload() -> None:
        nonlocal config
        log.info("SIGHUP received, reloading config")
        config = load()
        log.info("config reloaded (theme: %s)", config.theme)

    def request_stop(message: str) -> None:
        log.info(message)
        stop.set()

    handlers = {
        signal.SIGHUP: reload,
        signal.SIGTERM: functools.partial(
            request_stop, "SIGTERM received, playing shutdown sound"
        ),
        signal.SIGINT: functools.partial(
            request_stop, "shutting down, playing shutdown sound"
        ),
    }
    installed: list[signal.Signals] = []
    for sig, handler in handlers.items():
        try:
            loop.add_signal_handler(sig, handler)
        except (NotImplementedError, RuntimeError, ValueError) as exc:
            log.warning("cannot handle %s: %s", sig.name, exc)
        else:
            installed.append(sig)

    queue: asyncio.Queue[SoundEvent] = asyncio.Queue(maxsize=QUEUE_SIZE)
    watchers = _start_sources(config, queue)
    log.info("soundthemed running (theme: %s)", config.theme)

    stop_task = asyncio.create_task(stop.wait())
    try:
        await play_special_sound(config, "startup")
        while True:
            get_task = asyncio.create_task(queue.get())
            done, _ = await asyncio.wait(
                {get_task, stop_task}, return_when=asyncio.FIRST_COMPLETED
            )
            if get_task in done:
                await dispatch_event(config, get_task.result())
            else:
                get_task.cancel()
            if stop_task in done:
                break
        await play_special_sound(config, "shutdown")
    finally:
        stop_task.cancel()
        for task in watchers:
            task.cancel()
        await asyncio.gather(*watchers, return_exceptions=True)
        for sig in installed:
            loop.remove_signal_handler(sig)
    return True


def _print_result(name: str, result: Any) -> None:
    print(f"Theme '{name}' created at {result.theme_dir}")
    print(f"  Converted: {len(result.converted)} sounds")
    for sound_id in result.converted:
        print(f"    {sound_id}")
    if result.skipped:
        print("  Skipped:")
        for sound_id, reason in result.skipped:
            print(f"    {sound_id}: {reason}")
    for warning in result.warnings:
        print(f"  Warning: {warning}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="soundthemed", description="Freedesktop sound theme daemon"
    )
    parser.add_argument(
        "--config",
        action="store_true",
        help=f"launch the configuration GUI ({CONFIG_GUI})",
    )
    commands = parser.add_subparsers(dest="command")
    create = commands.add_parser(
        "create-theme", help="create a new sound theme from a folder of audio files"
    )
    create.add_argument("--name", required=True, help="name for the new theme")
    create.add_argument(
        "--from-dir",
        required=True,
        type=Path,
        help="source directory containing audio files",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point; returns the exit status."""
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    args = _build_parser().parse_args(argv)

    if args.config:
        try:
            os.execvp(CONFIG_GUI, [CONFIG_GUI])
        except OSError as exc:
            log.error("failed to launch %s: %s", CONFIG_GUI, exc)
        return 1

    if args.command == "create-theme":
        try:
            result = create_theme(args.name, args.from_dir)
        except ThemeCreationError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        _print_result(args.name, result)
        return 0

    asyncio.run(run_daemon())
    return 0


if __name__ == "__main__":
    sys.exit(main())