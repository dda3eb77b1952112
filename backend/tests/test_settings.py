"""
Tests for environment-driven settings.
"""

from decimal import Decimal
from pathlib import Path

import pytest

from config.settings import DEFAULT_DB_PATH, load_settings
from exceptions import ConfigurationError


def test_defaults():
    settings = load_settings({})

    assert settings.database_url == f"sqlite:///{DEFAULT_DB_PATH}"
    assert settings.is_sqlite
    assert settings.log_level == "INFO"
    assert settings.default_loan_days == 14
    assert settings.daily_overdue_fee == Decimal("0.50")
    assert settings.sql_echo is False


def test_values_from_environment(tmp_path):
    settings = load_settings({
        "LIBRARY_DATABASE_URL": "postgresql://library@db/library",
        "LIBRARY_LOG_DIR": str(tmp_path),
        "LIBRARY_LOG_LEVEL": "debug",
        "LIBRARY_DEFAULT_LOAN_DAYS": "21",
        "LIBRARY_DAILY_OVERDUE_FEE": "0.25",
        "LIBRARY_SQL_ECHO": "Yes",
    })

    assert not settings.is_sqlite
    assert settings.log_dir == Path(tmp_path)
    assert settings.log_level == "DEBUG"
    assert settings.default_loan_days == 21
    assert settings.daily_overdue_fee == Decimal("0.25")
    assert settings.sql_echo is True


@pytest.mark.parametrize("key,value", [
    ("LIBRARY_DEFAULT_LOAN_DAYS", "two weeks"),
    ("LIBRARY_DEFAULT_LOAN_DAYS", "60"),
    ("LIBRARY_DAILY_OVERDUE_FEE", "-1"),
    ("LIBRARY_DAILY_OVERDUE_FEE", "cheap"),
    ("LIBRARY_LOG_LEVEL", "LOUD"),
])
def test_invalid_values(key, value):
    with pytest.raises(ConfigurationError) as info:
        load_settings({key: value})

    assert info.value.details["invalid_keys"] == [key]


def test_all_invalid_keys_are_reported():
    with pytest.raises(ConfigurationError) as info:
        load_settings({"LIBRARY_DEFAULT_LOAN_DAYS": "0", "LIBRARY_DAILY_OVERDUE_FEE": "x"})

    assert info.value.details["invalid_keys"] == ["LIBRARY_DEFAULT_LOAN_DAYS", "LIBRARY_DAILY_OVERDUE_FEE"]
