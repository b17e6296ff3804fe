"""
Unit tests for TOML configuration loading.
"""

from pathlib import Path

import pytest

from backend.config import COURSE_COLORS, Config, LayoutConfig, LocalizationConfig, course_color


@pytest.fixture
def config_home(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestConfigLoad:
    """Test Config.load()."""

    def test_defaults_without_config_file(self, config_home):
        config = Config.load()
        assert config.default_view == "week"
        assert config.timezone is None
        assert config.layout == LayoutConfig()
        assert config.storage_file == config_home / "data" / "class-timetable" / "schedules.json"

    def test_explicit_missing_file(self, config_home):
        with pytest.raises(FileNotFoundError):
            Config.load(config_home / "nope.toml")

    def test_default_location(self, config_home):
        _write(config_home / "config" / "class-timetable" / "class-timetable.toml",
               '[General]\ndefault_view = "Month"\n')
        assert Config.load().default_view == "month"

    def test_full_file(self, config_home):
        path = _write(config_home / "timetable.toml", """
[General]
storage_file = "~/timetable/schedules.json"
timezone = "Asia/Kuala_Lumpur"
default_view = "day"

[Layout]
hour_height = 48
first_hour = 8
last_hour = 20

[Bindings]
next = "N"

[Colors]
current_time_line = "#ff0000"

[Labels]
button_today = "Now"

[Localization]
day_names = "Mo Di Mi Do Fr Sa So"
""")
        config = Config.load(path)
        assert config.storage_file == Path.home() / "timetable" / "schedules.json"
        assert config.timezone == "Asia/Kuala_Lumpur"
        assert config.default_view == "day"
        assert (config.layout.hour_height, config.layout.first_hour, config.layout.last_hour) == (48, 8, 20)
        assert config.layout.snap_minutes == 30
        assert config.bindings.next == "N"
        assert config.bindings.prev == "Left"
        assert config.colors.current_time_line == "#ff0000"
        assert config.labels.button_today == "Now"
        assert config.localization.get_day_name(0) == "Mo"
        assert config.localization.get_month_name(1) == "January"

    def test_unknown_keys_ignored(self, config_home):
        path = _write(config_home / "c.toml", '[Layout]\nhour_height = 50\nshadow = true\n')
        assert Config.load(path).layout.hour_height == 50

    def test_unknown_view(self, config_home):
        path = _write(config_home / "c.toml", '[General]\ndefault_view = "fortnight"\n')
        with pytest.raises(ValueError, match="Unknown view"):
            Config.load(path)

    @pytest.mark.parametrize("layout", [
        "hour_height = 0",
        "first_hour = 12\nlast_hour = 10",
        "last_hour = 25",
    ])
    def test_invalid_layout(self, config_home, layout):
        path = _write(config_home / "c.toml", f"[Layout]\n{layout}\n")
        with pytest.raises(ValueError, match=r"\[Layout\]"):
            Config.load(path)


class TestLocalization:
    """Test localized name lookups."""

    def test_out_of_range(self):
        localization = Config.defaults().localization
        assert localization.get_day_name(7) == ""
        assert localization.get_month_name(0) == ""
        assert localization.get_day_name(6) == "Sun"

    def test_names_optional(self):
        localization = LocalizationConfig(day_names=None, month_names=["Jan"])
        assert localization.day_names[0] == "Mon"
        assert localization.month_names == ["Jan"]
        assert localization.get_month_name(2) == ""


class TestCourseColor:
    """Test course_color()."""

    def test_stable_and_from_palette(self):
        assert course_color("CS101") == course_color(" cs101 ")
        assert course_color("CS101") in COURSE_COLORS
