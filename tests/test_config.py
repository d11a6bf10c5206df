"""
Configuration tests for the Classroom Service
"""
import pytest
from pydantic import ValidationError

from config.settings import get_settings, Settings


def test_settings_instance():
    """Test that settings can be instantiated"""
    settings = get_settings()
    assert isinstance(settings, Settings)


def test_settings_singleton():
    """Test that get_settings returns the same instance (cached)"""
    settings1 = get_settings()
    settings2 = get_settings()
    assert settings1 is settings2


def test_default_values():
    """Test that default values are set correctly"""
    settings = Settings(_env_file=None)

    assert settings.service_name == "classroom-api"
    assert settings.classroom_code_length == 6
    assert settings.allowed_origins == "*"
    assert "sqlite:///" in settings.database_url


def test_database_url_from_environment():
    """conftest points the service at an in-memory database"""
    assert get_settings().database_url == "sqlite:///:memory:"


def test_cors_origins_parsing():
    settings = Settings(_env_file=None, allowed_origins="http://a.test, http://b.test,,")
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


@pytest.mark.parametrize("length", [0, 3, 17])
def test_classroom_code_length_bounds(length):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, classroom_code_length=length)


def test_classroom_code_max_attempts_positive():
    settings = Settings(_env_file=None)
    assert settings.classroom_code_max_attempts == 10

    with pytest.raises(ValidationError):
        Settings(_env_file=None, classroom_code_max_attempts=0)
