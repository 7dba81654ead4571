"""Sound theme resolution following the freedesktop sound theme spec.

Search order: the user's and then the system's copy of the requested
theme, then the same for "freedesktop". Within a theme, ``stereo/`` is
tried before the theme root, with extensions .oga, .ogg, .wav.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

EXTENSIONS: tuple[str, ...] = ("oga", "ogg", "wav")
SUBDIRS: tuple[str, ...] = ("stereo", ".")
FALLBACK_THEME = "freedesktop"
SYSTEM_SOUNDS_DIR = Path("/usr/share/sounds")


@dataclass(frozen=True)
class ThemeInfo:
    """An installed sound theme."""

    id: str
    display_name: str
    path: Path


def user_sounds_dir() -> Path:
    """The user's sound theme directory, <data dir>/sounds."""
    xdg = os.environ.get("XDG_DATA_HOME", "")
    if xdg and os.path.isabs(xdg):
        base = Path(xdg)
    else:
        try:
            base = Path.home() / ".local" / "share"
        except RuntimeError:
            base = Path("~/.local/share")
    return base / "sounds"


def _subdirs(base: Path) -> list[Path]:
    return [base if sub == "." else base / sub for sub in SUBDIRS]


def _sorted_entries(directory: Path) -> list[Path]:
    try:
        return sorted(directory.iterdir())
    except OSError:
        return []


def _has_sound_extension(path: Path) -> bool:
    return path.suffix[1:] in EXTENSIONS


def search_dirs(theme: str) -> list[Path]:
    """Theme directories to search for a sound, in priority order."""
    user = user_sounds_dir()
    dirs = [user / theme, SYSTEM_SOUNDS_DIR / theme]
    if theme != FALLBACK_THEME:
        dirs += [user / FALLBACK_THEME, SYSTEM_SOUNDS_DIR / FALLBACK_THEME]
    return dirs


def resolve(theme: str, sound_id: str) -> Path | None:
    """Find the file for a sound ID, falling back to the freedesktop theme."""
    for base in search_dirs(theme):
        for directory in _subdirs(base):
            for ext in EXTENSIONS:
                path = directory / f"{sound_id}.{ext}"
                if path.is_file():
                    log.debug("resolved %s -> %s", sound_id, path)
                    return path
    log.debug("sound not found: %s (theme: %s)", sound_id, theme)
    return None


def has_sound_files(path: Path) -> bool:
    """Whether a directory or its stereo/ subdirectory holds any sound file."""
    return any(
        _has_sound_extension(entry)
        for directory in _subdirs(Path(path))
        for entry in _sorted_entries(directory)
    )


def read_theme_name(theme_dir: Path) -> str | None:
    """The Name= entry of a theme's index.theme, if present and non-empty."""
    try:
        contents = (Path(theme_dir) / "index.theme").read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None
    for line in contents.splitlines():
        if line.startswith("Name="):
            name = line[len("Name="):].strip()
            if name:
                return name
    return None


def list_themes() -> list[ThemeInfo]:
    """All installed themes with sound files, user copies overriding system ones."""
    themes: dict[str, ThemeInfo] = {}
    for base in (SYSTEM_SOUNDS_DIR, user_sounds_dir()):
        for path in _sorted_entries(base):
            if not path.is_dir() or not has_sound_files(path):
                continue
            theme_id = path.name
            display_name = read_theme_name(path) or theme_id
            themes[theme_id] = ThemeInfo(theme_id, display_name, path)
    return sorted(themes.values(), key=lambda info: info.display_name)


def list_theme_sounds(theme: str) -> list[tuple[str, Path]]:
    """(sound ID, path) pairs for every sound in a theme, sorted by ID."""
    sounds: dict[str, Path] = {}
    for theme_dir in (user_sounds_dir() / theme, SYSTEM_SOUNDS_DIR / theme):
        for directory in _subdirs(theme_dir):
            for path in _sorted_entries(directory):
                if _has_sound_extension(path) and path.stem:
                    sounds.setdefault(path.stem, path)
    return sorted(sounds.items())