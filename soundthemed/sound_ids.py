"""Freedesktop sound theme event IDs and the events the daemon plays."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class EventKind(enum.Enum):
    """Kinds of event that can trigger playback."""

    DEVICE_ADDED = enum.auto()
    DEVICE_REMOVED = enum.auto()
    POWER_PLUG = enum.auto()
    POWER_UNPLUG = enum.auto()
    BATTERY_LOW = enum.auto()
    BATTERY_CRITICAL = enum.auto()
    NETWORK_CONNECTED = enum.auto()
    NETWORK_DISCONNECTED = enum.auto()
    SESSION_LOGIN = enum.auto()
    SESSION_LOGOUT = enum.auto()
    SUSPEND_RESUME = enum.auto()
    AUDIO_VOLUME_CHANGE = enum.auto()
    CUSTOM = enum.auto()


_FIXED_IDS: dict[EventKind, str] = {
    EventKind.DEVICE_ADDED: "device-added",
    EventKind.DEVICE_REMOVED: "device-removed",
    EventKind.POWER_PLUG: "power-plug",
    EventKind.POWER_UNPLUG: "power-unplug",
    EventKind.BATTERY_LOW: "battery-low",
    EventKind.BATTERY_CRITICAL: "battery-caution",
    EventKind.NETWORK_CONNECTED: "network-connectivity-established",
    EventKind.NETWORK_DISCONNECTED: "network-connectivity-lost",
    EventKind.SESSION_LOGIN: "service-login",
    EventKind.SESSION_LOGOUT: "service-logout",
    EventKind.SUSPEND_RESUME: "service-login",
    EventKind.AUDIO_VOLUME_CHANGE: "audio-volume-change",
}


@dataclass(frozen=True)
class SoundEvent:
    """A sound event that should trigger playback."""

    kind: EventKind
    custom_id: str | None = None

    def __post_init__(self) -> None:
        if self.kind is EventKind.CUSTOM:
            if not isinstance(self.custom_id, str):
                raise ValueError("a custom event needs a sound ID")
        elif self.custom_id is not None:
            raise ValueError(f"{self.kind.name} events take no custom sound ID")

    @classmethod
    def custom(cls, event_id: str) -> SoundEvent:
        """An event requesting any freedesktop sound ID."""
        return cls(EventKind.CUSTOM, event_id)

    def sound_id(self) -> str:
        """The freedesktop sound theme ID for this event."""
        if self.kind is EventKind.CUSTOM:
            assert self.custom_id is not None
            return self.custom_id
        return _FIXED_IDS[self.kind]


_AUDIO_TEST_CHANNELS = (
    "front-left",
    "front-right",
    "front-center",
    "rear-left",
    "rear-right",
    "rear-center",
    "side-left",
    "side-right",
)

# Standard sound IDs grouped by category, in display order.
_CATEGORIES: dict[str, dict[str, str]] = {
    "alerts": {
        "alarm-clock-elapsed": "Alarm clock elapsed",
        "battery-caution": "Battery level critical",
        "battery-low": "Battery level low",
        "dialog-error": "Error dialog",
        "dialog-information": "Information dialog",
        "dialog-warning": "Warning dialog",
        "suspend-error": "Suspend failed",
    },
    "notifications": {
        "bell": "Terminal or system bell",
        "complete": "Task completed",
        "message": "Generic message notification",
        "message-new-instant": "New instant message",
        "phone-incoming-call": "Incoming phone call",
        "phone-outgoing-busy": "Outgoing call busy",
        "phone-outgoing-calling": "Outgoing call ringing",
        "window-attention": "Window requests attention",
    },
    "actions": {
        "camera-shutter": "Camera shutter",
        "screen-capture": "Screenshot taken",
        "trash-empty": "Trash emptied",
    },
    "devices": {
        "device-added": "Device plugged in",
        "device-removed": "Device unplugged",
    },
    "network": {
        "network-connectivity-established": "Network connected",
        "network-connectivity-lost": "Network disconnected",
    },
    "power": {
        "power-plug": "Power cable plugged in",
        "power-unplug": "Power cable unplugged",
    },
    "session": {
        "service-login": "Session login or unlock",
        "service-logout": "Session logout",
    },
    "lifecycle": {
        "soundthemed-start": "Sound daemon started",
        "soundthemed-stop": "Sound daemon stopped",
    },
    "audio": {
        "audio-volume-change": "Volume level changed",
        **{
            f"audio-channel-{channel}": "Audio test: " + channel.replace("-", " ")
            for channel in _AUDIO_TEST_CHANNELS
        },
        "audio-test-signal": "Audio test signal",
    },
}

_DESCRIPTIONS: dict[str, str] = {
    sound_id: description
    for group in _CATEGORIES.values()
    for sound_id, description in group.items()
}

ALL_SOUND_IDS: tuple[tuple[str, str], ...] = tuple(_DESCRIPTIONS.items())


def description_for(sound_id: str) -> str | None:
    """The human-readable description of a standard sound ID, if any."""
    return _DESCRIPTIONS.get(sound_id)