from pathlib import Path

import pytest

from calengine.config import Config


def write(tmp_path, text):
    path = tmp_path / "cmdcal.toml"
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults():
    config = Config()
    assert config.general.auto_decline is False
    assert config.export.directory == Path(".")
    assert config.headless.halt_on_declined is False


def test_load_all_sections(tmp_path):
    path = write(tmp_path, """
[General]
auto_decline = true

[Export]
directory = "/srv/calendars"

[Headless]
halt_on_declined = true
""")
    config = Config.load(path)
    assert config.general.auto_decline is True
    assert config.export.directory == Path("/srv/calendars")
    assert config.headless.halt_on_declined is True
    assert config.source == path


def test_missing_sections_keep_defaults(tmp_path):
    config = Config.load(write(tmp_path, "[General]\nauto_decline = true\n"))
    assert config.export.directory == Path(".")
    assert config.headless.halt_on_declined is False


def test_home_is_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    config = Config.load(write(tmp_path, '[Export]\ndirectory = "~/cal"\n'))
    assert config.export.directory == tmp_path / "cal"


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load(tmp_path / "nope.toml")


def test_missing_default_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert Config.get_default_config_path() == tmp_path / "cmdcal" / "cmdcal.toml"
    config = Config.load()
    assert config.source is None
    assert config.general.auto_decline is False


def test_default_file_is_used(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    (tmp_path / "cmdcal").mkdir()
    write(tmp_path / "cmdcal", "[Headless]\nhalt_on_declined = true\n")
    assert Config.load().headless.halt_on_declined is True


@pytest.mark.parametrize("text", [
    '[General]\nauto_decline = "yes"\n',
    '[Headless]\nhalt_on_declined = 1\n',
    '[Export]\ndirectory = ""\n',
    '[Export]\ndirectory = 5\n',
])
def test_bad_values_raise(tmp_path, text):
    with pytest.raises(ValueError):
        Config.load(write(tmp_path, text))
