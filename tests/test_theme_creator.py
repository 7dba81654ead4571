from pathlib import Path

import pytest

from soundthemed.theme_creator import CreateResult, ThemeCreationError, create_theme

FAKE_FFMPEG = """#!/bin/sh
if [ "$1" = "-version" ]; then
  exit 0
fi
for last; do :; done
printf 'converted' > "$last"
exit ${FAKE_FFMPEG_EXIT:-0}
"""


def _script(directory: Path, name: str, body: str) -> None:
    path = directory / name
    path.write_text(body)
    path.chmod(0o755)


@pytest.fixture
def env(tmp_path, monkeypatch):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    _script(bin_dir, "ffmpeg", FAKE_FFMPEG)
    monkeypatch.setenv("PATH", str(bin_dir))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("FAKE_FFMPEG_EXIT", raising=False)
    source = tmp_path / "source"
    source.mkdir()
    return tmp_path, source


def test_empty_name_is_rejected(env):
    _, source = env
    with pytest.raises(ThemeCreationError, match="empty"):
        create_theme("", source)


def test_missing_source_directory(env):
    tmp_path, _ = env
    with pytest.raises(ThemeCreationError, match="does not exist"):
        create_theme("mytheme", tmp_path / "nope")


def test_missing_ffmpeg(env, tmp_path, monkeypatch):
    _, source = env
    empty = tmp_path / "empty-bin"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    with pytest.raises(ThemeCreationError, match="ffmpeg"):
        create_theme("mytheme", source)
    assert not (tmp_path / "data" / "sounds" / "mytheme").exists()


def test_index_theme_is_written(env):
    tmp_path, source = env
    result = create_theme("mytheme", source)
    assert result.theme_dir == tmp_path / "data" / "sounds" / "mytheme"
    assert (result.theme_dir / "index.theme").read_text() == (
        "[Sound Theme]\nName=mytheme\nDirectories=stereo\n\n"
        "[stereo]\nOutputProfile=stereo\n"
    )
    assert result.converted == []


def test_ogg_files_are_copied(env):
    _, source = env
    (source / "device-added.ogg").write_bytes(b"OggS-data")
    result = create_theme("mytheme", source)
    assert result.converted == ["device-added"]
    assert (result.theme_dir / "stereo" / "device-added.oga").read_bytes() == b"OggS-data"
    assert result.warnings == []
    assert result.skipped == []


def test_other_formats_are_converted(env):
    _, source = env
    (source / "bell.MP3").write_bytes(b"ID3")
    (source / "readme.txt").write_text("not audio")
    result = create_theme("mytheme", source)
    assert result.converted == ["bell"]
    assert (result.theme_dir / "stereo" / "bell.oga").read_text() == "converted"
    assert not (result.theme_dir / "stereo" / "readme.oga").exists()


def test_failed_conversion_is_skipped(env, monkeypatch):
    _, source = env
    monkeypatch.setenv("FAKE_FFMPEG_EXIT", "3")
    (source / "bell.wav").write_bytes(b"RIFF")
    result = create_theme("mytheme", source)
    assert result.converted == []
    assert result.skipped == [("bell", "ffmpeg exited with code 3")]


def test_unknown_event_id_warns(env):
    _, source = env
    (source / "my-sound.oga").write_bytes(b"OggS")
    result = create_theme("mytheme", source)
    assert result.warnings == [
        "'my-sound' is not a standard freedesktop sound event ID"
    ]
    assert result.converted == ["my-sound"]


def test_result_defaults_are_independent():
    first = CreateResult(Path("/a"))
    second = CreateResult(Path("/b"))
    first.converted.append("bell")
    assert second.converted == []