import cmdcal


def test_headless_run(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    commands = tmp_path / "commands.txt"
    commands.write_text("create event Holiday on 2023-05-20\nexit\n", encoding="utf-8")

    assert cmdcal.main(["--mode", "headless", str(commands)]) == 0
    out = capsys.readouterr().out
    assert "All-day event 'Holiday' created successfully." in out


def test_headless_failure_exit_status(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    commands = tmp_path / "commands.txt"
    commands.write_text("nonsense\nexit\n", encoding="utf-8")
    assert cmdcal.main(["--mode", "headless", str(commands)]) == 1


def test_headless_requires_file(capsys):
    assert cmdcal.main(["--mode", "headless"]) == 1
    assert "requires a command file" in capsys.readouterr().err


def test_missing_explicit_config(tmp_path, capsys):
    commands = tmp_path / "commands.txt"
    commands.write_text("exit\n", encoding="utf-8")
    status = cmdcal.main(["--mode", "headless", str(commands), "-c", str(tmp_path / "none.toml")])
    assert status == 1
    assert "Configuration file not found" in capsys.readouterr().err


def test_config_directory_applies_to_export(tmp_path, monkeypatch):
    export_dir = tmp_path / "exports"
    export_dir.mkdir()
    config = tmp_path / "cmdcal.toml"
    config.write_text(f'[Export]\ndirectory = "{export_dir}"\n', encoding="utf-8")
    commands = tmp_path / "commands.txt"
    commands.write_text("create event Holiday on 2023-05-20\nexport cal out.csv\nexit\n", encoding="utf-8")

    assert cmdcal.main(["--mode", "headless", str(commands), "--config", str(config)]) == 0
    assert (export_dir / "out.csv").exists()
