import pytest

from soundthemed.sound_ids import EventKind, SoundEvent
from soundthemed.udev_monitor import Uevent, classify, parse_uevent


def _datagram(action, devpath, **props):
    fields = [f"{action}@{devpath}", f"ACTION={action}", f"DEVPATH={devpath}"]
    fields += [f"{key}={value}" for key, value in props.items()]
    return ("\0".join(fields) + "\0").encode()


def test_parse_kernel_uevent():
    data = _datagram(
        "add", "/devices/pci0000:00/usb1/1-1",
        SUBSYSTEM="usb", DEVTYPE="usb_device", SEQNUM="1234",
    )
    uevent = parse_uevent(data)
    assert uevent.action == "add"
    assert uevent.devpath == "/devices/pci0000:00/usb1/1-1"
    assert uevent.subsystem == "usb"
    assert uevent.devtype == "usb_device"
    assert uevent.properties["SEQNUM"] == "1234"


def test_parse_rejects_udev_format():
    assert parse_uevent(b"libudev\0\xfe\xed\xca\xfe") is None


def test_parse_rejects_garbage():
    assert parse_uevent(b"no header here\0KEY=VALUE\0") is None


@pytest.mark.parametrize(
    "action, expected",
    [
        ("add", SoundEvent(EventKind.DEVICE_ADDED)),
        ("remove", SoundEvent(EventKind.DEVICE_REMOVED)),
        ("bind", None),
    ],
)
def test_usb_device_events(action, expected):
    uevent = parse_uevent(
        _datagram(action, "/devices/usb1/1-2", SUBSYSTEM="usb", DEVTYPE="usb_device")
    )
    assert classify(uevent) == expected


def test_usb_interface_is_ignored():
    uevent = parse_uevent(
        _datagram("add", "/devices/usb1/1-2/1-2:1.0", SUBSYSTEM="usb", DEVTYPE="usb_interface")
    )
    assert classify(uevent) is None


@pytest.mark.parametrize(
    "online, expected",
    [
        ("1", SoundEvent(EventKind.POWER_PLUG)),
        ("0", SoundEvent(EventKind.POWER_UNPLUG)),
        ("2", None),
    ],
)
def test_mains_change(online, expected):
    uevent = parse_uevent(
        _datagram(
            "change", "/devices/platform/AC",
            SUBSYSTEM="power_supply", POWER_SUPPLY_TYPE="Mains", POWER_SUPPLY_ONLINE=online,
        )
    )
    assert classify(uevent) == expected


def test_battery_change_is_ignored():
    uevent = parse_uevent(
        _datagram(
            "change", "/devices/platform/BAT0",
            SUBSYSTEM="power_supply", POWER_SUPPLY_TYPE="Battery", POWER_SUPPLY_ONLINE="1",
        )
    )
    assert classify(uevent) is None


def test_mains_add_is_ignored():
    uevent = Uevent(
        "add", "/devices/platform/AC",
        {"SUBSYSTEM": "power_supply", "POWER_SUPPLY_TYPE": "Mains", "POWER_SUPPLY_ONLINE": "1"},
    )
    assert classify(uevent) is None


def test_other_subsystem_is_ignored():
    uevent = Uevent("add", "/devices/virtual/net/lo", {"SUBSYSTEM": "net"})
    assert classify(uevent) is None