"""Turn a folder of audio files into a freedesktop sound theme."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

from soundthemed.sound_ids import description_for
from soundthemed.theme import user_sounds_dir

log = logging.getLogger(__name__)

INPUT_EXTENSIONS: tuple[str, ...] = (
    "oga", "ogg", "mp3", "wav", "m4a", "flac", "opus", "wma", "aac",
)
_COPY_EXTENSIONS = ("oga", "ogg")


class ThemeCreationError(Exception):
    """The theme could not be created at all."""


@dataclass
class CreateResult:
    """What creating a theme produced."""

    theme_dir: Path
    converted: list[str] = field(default_factory=list)
    skipped: list[tuple[str, str]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _ffmpeg_available() -> bool:
    try:
        subprocess.run(["ffmpeg", "-version"], capture_output=True, check=False)
    except OSError:
        return False
    return True


def _index_theme(name: str) -> str:
    return (
        f"[Sound Theme]\nName={name}\nDirectories=stereo\n\n"
        "[stereo]\nOutputProfile=stereo\n"
    )


def _convert(source: Path, output: Path) -> str | None:
    """Convert one file to Ogg Vorbis; return the reason on failure."""
    try:
        completed = subprocess.run(
            ["ffmpeg", "-y", "-i", str(source),
             "-c:a", "libvorbis", "-q:a", "5", str(output)],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        return f"ffmpeg error: {exc}"
    if completed.returncode == 0:
        return None
    code = completed.returncode if completed.returncode >= 0 else -1
    return f"ffmpeg exited with code {code}"


def create_theme(name: str, from_dir: Path | str) -> CreateResult:
    """Create theme ``name`` under the user's sounds directory from ``from_dir``.

    Files are expected to be named after freedesktop event IDs. Ogg files
    are copied, everything else is converted with ffmpeg. Raises
    ThemeCreationError when the theme cannot be set up.
    """
    from_dir = Path(from_dir)
    if not name:
        raise ThemeCreationError("Theme name cannot be empty")
    if not from_dir.is_dir():
        raise ThemeCreationError(f"Source directory does not exist: {from_dir}")
    if not _ffmpeg_available():
        raise ThemeCreationError("ffmpeg is not installed or not in PATH")

    theme_dir = user_sounds_dir() / name
    stereo_dir = theme_dir / "stereo"
    try:
        stereo_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ThemeCreationError(f"Failed to create theme directory: {exc}") from exc
    try:
        (theme_dir / "index.theme").write_text(_index_theme(name), encoding="utf-8")
    except OSError as exc:
        raise ThemeCreationError(f"Failed to write index.theme: {exc}") from exc

    try:
        entries = sorted(from_dir.iterdir())
    except OSError as exc:
        raise ThemeCreationError(f"Failed to read source directory: {exc}") from exc

    result = CreateResult(theme_dir)
    for path in entries:
        if not path.is_file():
            continue
        ext = path.suffix[1:].lower()
        if ext not in INPUT_EXTENSIONS:
            continue
        event_id = path.stem
        if not event_id:
            continue

        if description_for(event_id) is None:
            result.warnings.append(
                f"'{event_id}' is not a standard freedesktop sound event ID"
            )

        output = stereo_dir / f"{event_id}.oga"
        if ext in _COPY_EXTENSIONS:
            try:
                shutil.copyfile(path, output)
            except OSError as exc:
                result.skipped.append((event_id, f"copy failed: {exc}"))
            else:
                result.converted.append(event_id)
            continue

        failure = _convert(path, output)
        if failure is None:
            result.converted.append(event_id)
        else:
            result.skipped.append((event_id, failure))

    log.info(
        "theme '%s' created: %d sounds converted, %d skipped",
        name, len(result.converted), len(result.skipped),
    )
    return result