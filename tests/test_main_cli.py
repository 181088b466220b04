import config
import main


def test_record_history_export_clear_flow(tmp_path, capsys):
    data_dir = str(tmp_path / "home")

    assert main.main(["--data-dir", data_dir, "record", "--type", "Fastball",
                      "--result", "Called Strike", "--mph", "92", "--ttp", "0.41", "--fps"]) == 0
    assert "1 total" in capsys.readouterr().out

    assert main.main(["--data-dir", data_dir, "history"]) == 0
    out = capsys.readouterr().out
    assert "Fastball - Called Strike" in out
    assert "[FPS]" in out

    assert main.main(["--data-dir", data_dir, "export"]) == 0
    assert "pitch_data_" in capsys.readouterr().out
    assert list((tmp_path / "home").glob("pitch_data_*.csv"))

    assert main.main(["--data-dir", data_dir, "clear"]) == 1
    assert "Are you sure" in capsys.readouterr().err

    assert main.main(["--data-dir", data_dir, "clear", "--yes"]) == 0
    capsys.readouterr()
    assert main.main(["--data-dir", data_dir, "history"]) == 0
    assert "No pitches recorded yet" in capsys.readouterr().out


def test_data_dir_defaults_to_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("PITCH_TRACKER_HOME", str(tmp_path / "env_home"))
    bridge = main.build_bridge()
    try:
        assert bridge.store.db_path == str(tmp_path / "env_home" / "pitchTracker.sqlite3")
        assert bridge.store.is_ready
    finally:
        bridge.store.close()


def test_unwritable_data_dir_degrades_instead_of_crashing(monkeypatch, tmp_path, capsys):
    def _denied(path, exist_ok=False):
        raise PermissionError(path)

    monkeypatch.setattr(config.os, "makedirs", _denied)
    assert config.ensure_user_data_dir(str(tmp_path / "denied")).endswith("saves")

    monkeypatch.chdir(tmp_path)
    assert main.main(["--data-dir", str(tmp_path / "denied"), "record",
                      "--type", "Fastball", "--result", "Ball"]) == 1
    assert "Failed to record pitch" in capsys.readouterr().err
