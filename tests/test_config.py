"""Tests for Settings configuration model."""

from pathlib import Path

import pytest

from memopad.config import Settings
from memopad.errors import ConfigurationFailure


class TestDefaults:
    def test_default_app_group_id(self):
        s = Settings()
        assert s.app_group_id == "group.com.shuhei.digitalmemopad"

    def test_default_database_name(self):
        s = Settings()
        assert s.database_name == "DigitalMemoPad"

    def test_default_shared_container_root(self):
        s = Settings()
        assert s.shared_container_root == Path("data/groups")

    def test_default_timeline_values(self):
        s = Settings()
        assert s.recent_limit == 5
        assert s.warning_hours == 3
        assert s.alarm_hours == 5
        assert s.fallback_refresh_minutes == 60

    def test_default_log_level(self):
        s = Settings()
        assert s.log_level == "INFO"


class TestStorePath:
    def test_resolves_inside_group_container(self, tmp_path: Path):
        s = Settings(shared_container_root=tmp_path)
        path = s.store_path()
        assert path == tmp_path / "group.com.shuhei.digitalmemopad" / "DigitalMemoPad.sqlite"

    def test_creates_container_directory(self, tmp_path: Path):
        s = Settings(shared_container_root=tmp_path / "nested", app_group_id="group.x")
        container = s.shared_container()
        assert container.is_dir()
        assert container == tmp_path / "nested" / "group.x"

    def test_custom_database_name(self, tmp_path: Path):
        s = Settings(shared_container_root=tmp_path, database_name="Notes")
        assert s.store_path().name == "Notes.sqlite"

    def test_blank_group_id_raises(self, tmp_path: Path):
        s = Settings(shared_container_root=tmp_path, app_group_id="   ")
        with pytest.raises(ConfigurationFailure, match="empty"):
            s.store_path()

    def test_unwritable_root_raises(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        s = Settings(shared_container_root=blocker)
        with pytest.raises(ConfigurationFailure, match="could not be created"):
            s.store_path()


class TestExtraForbidden:
    def test_unknown_env_var_raises(self):
        with pytest.raises(ValueError, match="extra_forbidden"):
            Settings(**{"nonexistent_field": "value"})
