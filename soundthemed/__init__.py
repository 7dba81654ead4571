"""Freedesktop sound theme daemon: theme lookup, configuration, event monitors and theme creation."""

__version__ = "0.1.0"
__all__ = [
    "battery",
    "config",
    "daemon",
    "niri",
    "player",
    "sound_ids",
    "theme",
    "theme_creator",
    "udev_monitor",
    "volume",
]