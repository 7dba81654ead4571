# soundthemed

A small daemon that plays sounds from the active freedesktop sound theme when
things happen on your desktop:

- a USB device is plugged in or removed (`device-added`, `device-removed`)
- the mains charger is plugged in or unplugged (`power-plug`, `power-unplug`)
- the battery runs low or reaches a critical level while discharging
  (`battery-low`, `battery-caution`)
- the default audio sink's volume changes (`audio-volume-change`)
- a window becomes urgent under the niri compositor (`bell`)
- the daemon starts up or shuts down (`soundthemed-start`, `soundthemed-stop`
  by default)

Sounds are played through `pw-play` (PipeWire). Themes are looked up in
`$XDG_DATA_HOME/sounds/<theme>/` (default `~/.local/share/sounds/<theme>/`)
and `/usr/share/sounds/<theme>/`, then the same places for the `freedesktop`
theme. Within a theme the `stereo/` subdirectory is tried before the theme
root, with the extensions `.oga`, `.ogg` and `.wav` in that order.

## Installation

```
pip install .
```

Creating themes from non-Ogg audio needs `ffmpeg` on the `PATH`. Volume
monitoring uses `wpctl` and `playerctl`.

## Running the daemon

```
soundthemed
```

If sounds are disabled in the configuration the daemon exits at once. While
running it:

- reads USB and power-supply events from the kernel uevent netlink socket;
- polls the battery in `/sys/class/power_supply` once a minute, warning once
  per discharge for each threshold;
- polls `wpctl get-volume @DEFAULT_AUDIO_SINK@` every 20 ms and plays a sound
  on change, unless `playerctl -a status` reports a player as `Playing`;
- when `XDG_CURRENT_DESKTOP` is `niri`, follows `niri msg event-stream` and
  plays `bell` when a window becomes urgent (events in the first two seconds
  are ignored).

It reloads its configuration on `SIGHUP` and, on `SIGTERM` or Ctrl-C, plays
the shutdown sound to the end before exiting.

`soundthemed --config` replaces the process with a program called
`soundthemed-config`; that program is not part of this package.

## Creating a theme

Put audio files named after freedesktop event IDs (for example
`device-added.mp3`, `battery-low.wav`) into a folder, then run:

```
soundthemed create-theme --name mytheme --from-dir ~/my-sounds
```

Files ending in `.oga`, `.ogg`, `.mp3`, `.wav`, `.m4a`, `.flac`, `.opus`,
`.wma` or `.aac` are taken. Ogg files are copied, the rest converted to Ogg
Vorbis with `ffmpeg`, and all are written as `<id>.oga` under
`~/.local/share/sounds/mytheme/stereo/` together with an `index.theme`. Files
whose names are not standard event IDs are still included, with a warning.
The command prints what was converted, skipped and warned about.

## Configuration

The theme name and the global on/off switch are read from GNOME's
`org.gnome.desktop.sound` settings (`theme-name`, `event-sounds`) when
`gsettings` is available. Everything else lives in
`$XDG_CONFIG_HOME/soundthemed/config.toml` (default
`~/.config/soundthemed/config.toml`). A file that cannot be parsed is ignored
and the defaults are used.

```toml
theme = "freedesktop"
enabled = true
battery_low_percent = 15
battery_critical_percent = 5
startup_sound = "soundthemed-start"
shutdown_sound = "soundthemed-stop"

[events]
# "default" uses the theme, "none" silences, anything else is a file path
device-added = "none"
bell = "/home/me/sounds/ding.oga"

[sources]
udev = true
battery = true
volume = false
```

`startup_sound` and `shutdown_sound` take a sound event ID from the theme, an
absolute file path, or `"none"`.

`config.save` writes the theme and enabled state back to gsettings and the
whole configuration to the TOML file.

## Library use

```python
from soundthemed import config, theme
from soundthemed.sound_ids import SoundEvent, description_for

path = theme.resolve("freedesktop", "device-added")
print(description_for("device-added"))
for info in theme.list_themes():
    print(info.id, info.display_name)
print(theme.list_theme_sounds("freedesktop"))

cfg = config.load()
# a Path to play, config.SILENCED, or None for the theme's own sound
print(config.resolve_override(cfg, "bell"))

print(SoundEvent.custom("message").sound_id())
```

`soundthemed.theme_creator.create_theme(name, from_dir)` returns a
`CreateResult` and raises `ThemeCreationError` when the theme cannot be set
up.

## What it does not do

- There is no configuration window; `--config` only starts an external
  `soundthemed-config` program if one is installed.
- Network connectivity, logind session (unlock, resume from suspend) and
  desktop notification sounds are not produced. The `network`, `session` and
  `notifications` source switches are accepted in the config file but only
  logged as unavailable.
- No D-Bus service is offered, so other programs cannot request sounds from
  the daemon; the `dbus_service` switch is likewise only logged.