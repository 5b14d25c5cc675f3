"""Tests for registry_access.output_manager."""

from datetime import datetime, timedelta

import pytest

from registry_access.output_manager import OutputManager, safe_folder_label


def test_safe_folder_label():
    assert safe_folder_label("Registry Access/2026") == "Registry_Access_2026"
    assert safe_folder_label("ok-name_1") == "ok-name_1"
    assert safe_folder_label("") == "report"


def test_create_run_dir(tmp_path):
    manager = OutputManager(tmp_path, "Registry Access", run_time=datetime(2026, 10, 19, 9, 30))
    run_dir = manager.create_run_dir()
    assert run_dir == tmp_path / "20261019_0930_Registry_Access"
    assert run_dir.is_dir()
    assert manager.get_output_path("a.json") == run_dir / "a.json"


def test_output_path_before_create_raises(tmp_path):
    manager = OutputManager(tmp_path, "r")
    with pytest.raises(RuntimeError):
        manager.get_output_path("a.json")


def _stamp(days_ago):
    return (datetime.now() - timedelta(days=days_ago)).strftime("%Y%m%d_%H%M")


def test_cleanup_removes_only_expired(tmp_path):
    old = tmp_path / f"{_stamp(40)}_Registry_Access"
    recent = tmp_path / f"{_stamp(1)}_Registry_Access"
    unrelated = tmp_path / "keep_me"
    bad_date = tmp_path / "20261399_9999_Registry_Access"
    for folder in (old, recent, unrelated, bad_date):
        folder.mkdir()
    (tmp_path / f"{_stamp(90)}_file.txt").write_text("not a folder")

    manager = OutputManager(tmp_path, "Registry_Access", retention_days=30)
    deleted = manager.cleanup_old_folders()

    assert deleted == [old.name]
    assert not old.exists()
    assert recent.exists()
    assert unrelated.exists()
    assert bad_date.exists()


def test_cleanup_disabled(tmp_path):
    old = tmp_path / f"{_stamp(400)}_Registry_Access"
    old.mkdir()
    manager = OutputManager(tmp_path, "Registry_Access", retention_days=0)
    assert manager.cleanup_old_folders() == []
    assert old.exists()


def test_cleanup_missing_base_dir(tmp_path):
    manager = OutputManager(tmp_path / "missing", "r", retention_days=5)
    assert manager.cleanup_old_folders() == []
