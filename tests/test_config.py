"""
Tests for configuration loading and validation.
"""

from datetime import time
from pathlib import Path

import pytest
from pydantic import ValidationError

from barberslots.config import AppConfig, BusinessHoursConfig, load_config


def _write(tmp_path: Path, content: str) -> Path:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(content, encoding="utf-8")
    return config_path


class TestBusinessHoursConfig:
    """Tests for opening hour settings."""

    def test_defaults(self):
        config = BusinessHoursConfig()

        assert config.get_opening_time() == time(9, 0)
        assert config.get_closing_time() == time(19, 0)
        assert config.slot_minutes == 30
        assert config.closed_days == [6]

    def test_invalid_hour(self):
        with pytest.raises(ValidationError, match="Hour must be between 0 and 23"):
            BusinessHoursConfig(opening_hour=25)

    def test_closing_before_opening(self):
        with pytest.raises(ValidationError, match="closing_hour must be later than opening_hour"):
            BusinessHoursConfig(opening_hour=18, closing_hour=9)

    def test_closed_days_are_deduplicated(self):
        config = BusinessHoursConfig(closed_days=[6, 0, 6])

        assert config.closed_days == [6, 0]

    def test_closed_days_out_of_range(self):
        with pytest.raises(ValidationError, match="closed_days must be between 0 and 6"):
            BusinessHoursConfig(closed_days=[7])

    def test_slot_minutes_must_be_positive(self):
        with pytest.raises(ValidationError):
            BusinessHoursConfig(slot_minutes=0)


class TestAppConfig:
    """Tests for the application configuration."""

    def test_defaults_match_the_shop(self):
        config = AppConfig()
        hours = config.to_business_hours()

        assert config.timezone == "Europe/Berlin"
        assert config.booking_horizon_months == 1
        assert config.cancellation_notice_hours == 2
        assert hours.opening_time == time(9, 0)
        assert hours.closing_time == time(19, 0)
        assert hours.closed_weekdays == [6]
        assert hours.timezone == "Europe/Berlin"

    def test_unknown_timezone(self):
        with pytest.raises(ValidationError, match="Unknown timezone"):
            AppConfig(timezone="Mars/Olympus_Mons")

    def test_negative_horizon(self):
        with pytest.raises(ValidationError):
            AppConfig(booking_horizon_months=-1)

    def test_load_from_yaml(self, tmp_path):
        config_path = _write(tmp_path, (
            "timezone: Europe/Vienna\n"
            "business_hours:\n"
            "  opening_hour: 8\n"
            "  closing_hour: 18\n"
            "  closed_days: [5, 6]\n"
            "booking_horizon_months: 2\n"
            "data_file: appointments.json\n"
        ))

        config = AppConfig.load_from_yaml(config_path)

        assert config.timezone == "Europe/Vienna"
        assert config.business_hours.opening_hour == 8
        assert config.business_hours.closed_days == [5, 6]
        assert config.booking_horizon_months == 2
        assert config.data_file == tmp_path / "appointments.json"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            AppConfig.load_from_yaml(tmp_path / "config.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_path = _write(tmp_path, "timezone: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            AppConfig.load_from_yaml(config_path)

    def test_non_mapping_root(self, tmp_path):
        config_path = _write(tmp_path, "- just\n- a list\n")

        with pytest.raises(ValueError, match="must contain a mapping"):
            AppConfig.load_from_yaml(config_path)

    def test_empty_file_uses_defaults(self, tmp_path):
        config = AppConfig.load_from_yaml(_write(tmp_path, ""))

        assert config == AppConfig()


def test_load_config_without_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("barberslots.config.get_default_config_path", lambda: tmp_path / "config.yaml")

    assert load_config() == AppConfig()


def test_load_config_explicit_file(tmp_path):
    config_path = _write(tmp_path, "cancellation_notice_hours: 4\n")

    assert load_config(config_path).cancellation_notice_hours == 4
