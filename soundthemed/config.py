"""Configuration: gsettings for theme and enabled state, TOML for the rest.

gsettings is consulted first for the sound theme and whether event sounds
are on; ``config.toml`` under the user's config directory supplies the
remaining settings and acts as the fallback.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import subprocess
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

log = logging.getLogger(__name__)

_GSETTINGS_SCHEMA = "org.gnome.desktop.sound"


class _Silenced:
    """Marker for an event whose sound has been turned off."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "SILENCED"


SILENCED = _Silenced()


def _expect(value: Any, kind: type, name: str) -> Any:
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        raise ValueError(f"{name}: expected {kind.__name__}, got {value!r}")
    return value


def _expect_percent(value: Any, name: str) -> int:
    _expect(value, int, name)
    if not 0 <= value <= 255:
        raise ValueError(f"{name}: {value} is out of range 0-255")
    return value


@dataclass
class SourceConfig:
    """Toggles for the individual event sources."""

    udev: bool = True
    battery: bool = True
    network: bool = True
    session: bool = True
    volume: bool = False
    notifications: bool = True
    dbus_service: bool = True

    @classmethod
    def _from_dict(cls, data: Any) -> SourceConfig:
        _expect(data, Mapping, "sources")
        known = {f.name for f in dataclasses.fields(cls)}
        values = {
            key: _expect(value, bool, f"sources.{key}")
            for key, value in data.items()
            if key in known
        }
        return cls(**values)


@dataclass
class Config:
    """The daemon's settings."""

    theme: str = "freedesktop"
    enabled: bool = True
    battery_low_percent: int = 15
    battery_critical_percent: int = 5
    startup_sound: str = "soundthemed-start"
    shutdown_sound: str = "soundthemed-stop"
    events: dict[str, str] = field(default_factory=dict)
    sources: SourceConfig = field(default_factory=SourceConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Config:
        """Build a config from parsed TOML; missing keys take their defaults.

        Raises ValueError when a value has the wrong type or range.
        """
        _expect(data, Mapping, "config")
        values: dict[str, Any] = {}
        for name in ("theme", "startup_sound", "shutdown_sound"):
            if name in data:
                values[name] = _expect(data[name], str, name)
        if "enabled" in data:
            values["enabled"] = _expect(data["enabled"], bool, "enabled")
        for name in ("battery_low_percent", "battery_critical_percent"):
            if name in data:
                values[name] = _expect_percent(data[name], name)
        if "events" in data:
            events = _expect(data["events"], Mapping, "events")
            values["events"] = {
                _expect(key, str, "events key"): _expect(value, str, f"events.{key}")
                for key, value in events.items()
            }
        if "sources" in data:
            values["sources"] = SourceConfig._from_dict(data["sources"])
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """The config as plain data, in file order."""
        return dataclasses.asdict(self)


def _gsettings_get(key: str) -> str | None:
    try:
        result = subprocess.run(
            ["gsettings", "get", _GSETTINGS_SCHEMA, key],
            capture_output=True,
            check=False,
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None
    try:
        return result.stdout.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _gsettings_set(key: str, value: str) -> bool:
    try:
        result = subprocess.run(
            ["gsettings", "set", _GSETTINGS_SCHEMA, key, value],
            check=False,
        )
    except OSError:
        return False
    return result.returncode == 0


def _theme_from_gsettings() -> str | None:
    raw = _gsettings_get("theme-name")
    if raw is None:
        return None
    theme = raw.strip().strip("'")
    return theme or None


def _enabled_from_gsettings() -> bool | None:
    raw = _gsettings_get("event-sounds")
    if raw is None:
        return None
    return {"true": True, "false": False}.get(raw.strip())


def config_path() -> Path:
    """Location of the config file: <config dir>/soundthemed/config.toml."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg and os.path.isabs(xdg):
        base = Path(xdg)
    else:
        try:
            base = Path.home() / ".config"
        except RuntimeError:
            base = Path("~/.config")
    return base / "soundthemed" / "config.toml"


def _load_file() -> Config:
    path = config_path()
    try:
        contents = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        log.info("no config file found, using defaults")
        return Config()
    try:
        config = Config.from_dict(tomllib.loads(contents))
    except (tomllib.TOMLDecodeError, ValueError) as exc:
        log.warning("failed to parse config: %s, using defaults", exc)
        return Config()
    log.info("loaded config from %s", path)
    return config


def load() -> Config:
    """Load the config, with gsettings taking precedence for theme and enabled."""
    config = _load_file()

    theme = _theme_from_gsettings()
    if theme is not None:
        log.info("gsettings sound theme: %s", theme)
        config.theme = theme
    enabled = _enabled_from_gsettings()
    if enabled is not None:
        config.enabled = enabled

    log.info("active theme: %s", config.theme)
    return config


def save(config: Config) -> None:
    """Write theme and enabled to gsettings and everything to the TOML file.

    Raises OSError if the file cannot be written.
    """
    if _gsettings_set("theme-name", config.theme):
        log.info("gsettings: set theme-name = %s", config.theme)
    else:
        log.warning("gsettings: failed to set theme-name")
    enabled = "true" if config.enabled else "false"
    if _gsettings_set("event-sounds", enabled):
        log.info("gsettings: set event-sounds = %s", enabled)
    else:
        log.warning("gsettings: failed to set event-sounds")

    path = config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(tomli_w.dumps(config.to_dict()), encoding="utf-8")
    log.info("saved config to %s", path)


def resolve_override(config: Config, sound_id: str) -> Path | _Silenced | None:
    """Look up a per-event override.

    Returns a Path to play, SILENCED if the event is turned off, or None
    when the theme's own sound should be used.
    """
    value = config.events.get(sound_id)
    if value is None or value == "default":
        return None
    if value == "none":
        return SILENCED
    return Path(value)