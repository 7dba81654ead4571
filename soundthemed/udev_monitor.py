"""USB and charger events from kernel uevents.

Listens on the kernel uevent netlink socket for USB device add/remove
and for mains power supply changes.
"""

from __future__ import annotations

import asyncio
import logging
import socket
from dataclasses import dataclass, field

from soundthemed.sound_ids import EventKind, SoundEvent

log = logging.getLogger(__name__)

NETLINK_KOBJECT_UEVENT = 15
_KERNEL_GROUP = 1
_BUFFER_SIZE = 64 * 1024


@dataclass(frozen=True)
class Uevent:
    """One kernel uevent."""

    action: str
    devpath: str
    properties: dict[str, str] = field(default_factory=dict)

    @property
    def subsystem(self) -> str:
        return self.properties.get("SUBSYSTEM", "")

    @property
    def devtype(self) -> str:
        return self.properties.get("DEVTYPE", "")


def parse_uevent(data: bytes) -> Uevent | None:
    """Parse a kernel uevent datagram (``action@devpath`` then KEY=VALUE fields).

    Messages in the udev daemon's own format are not handled and give None.
    """
    if data.startswith(b"libudev\0"):
        return None
    fields = data.decode("utf-8", "replace").split("\0")
    header, _, devpath = fields[0].partition("@")
    if not header or not devpath:
        return None
    properties: dict[str, str] = {}
    for item in fields[1:]:
        key, sep, value = item.partition("=")
        if sep and key:
            properties[key] = value
    action = properties.get("ACTION", header)
    return Uevent(action, properties.get("DEVPATH", devpath), properties)


def _classify_usb(uevent: Uevent) -> SoundEvent | None:
    if uevent.devtype != "usb_device":
        return None
    if uevent.action == "add":
        log.info("udev: USB device added")
        return SoundEvent(EventKind.DEVICE_ADDED)
    if uevent.action == "remove":
        log.info("udev: USB device removed")
        return SoundEvent(EventKind.DEVICE_REMOVED)
    return None


def _classify_power_supply(uevent: Uevent) -> SoundEvent | None:
    if uevent.action != "change":
        return None
    if uevent.properties.get("POWER_SUPPLY_TYPE") != "Mains":
        return None
    online = uevent.properties.get("POWER_SUPPLY_ONLINE")
    if online == "1":
        log.info("power: charger plugged in")
        return SoundEvent(EventKind.POWER_PLUG)
    if online == "0":
        log.info("power: charger unplugged")
        return SoundEvent(EventKind.POWER_UNPLUG)
    return None


def classify(uevent: Uevent) -> SoundEvent | None:
    """The sound event a uevent stands for, if any."""
    if uevent.subsystem == "usb":
        return _classify_usb(uevent)
    if uevent.subsystem == "power_supply":
        return _classify_power_supply(uevent)
    return None


def _open_socket() -> socket.socket:
    family = getattr(socket, "AF_NETLINK", None)
    if family is None:
        raise OSError("netlink sockets are not available on this platform")
    sock = socket.socket(family, socket.SOCK_DGRAM, NETLINK_KOBJECT_UEVENT)
    try:
        sock.bind((0, _KERNEL_GROUP))
        sock.setblocking(False)
    except OSError:
        sock.close()
        raise
    return sock


async def watch(queue: asyncio.Queue) -> None:
    """Queue events for USB hotplug and charger plug/unplug."""
    try:
        sock = _open_socket()
    except OSError as exc:
        log.error("failed to start udev listener: %s", exc)
        return

    log.info("udev: watching for USB and power_supply events")
    loop = asyncio.get_running_loop()
    with sock:
        while True:
            try:
                data = await loop.sock_recv(sock, _BUFFER_SIZE)
            except InterruptedError:
                continue
            except OSError as exc:
                log.error("uevent socket error: %s", exc)
                break
            uevent = parse_uevent(data)
            if uevent is None:
                continue
            event = classify(uevent)
            if event is not None:
                await queue.put(event)