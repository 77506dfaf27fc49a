"""Settings validation tests."""

import pytest
from pydantic import ValidationError

from tasktrack.config import Settings


def test_default_secret_allowed_in_development():
    s = Settings(environment="development", jwt_secret="change-me-in-production")
    assert s.access_token_expire_seconds == 900
    assert s.refresh_token_expire_seconds == 604800


def test_default_secret_rejected_in_production():
    with pytest.raises(ValidationError, match="JWT_SECRET"):
        Settings(environment="production", jwt_secret="change-me-in-production")


def test_custom_secret_accepted_in_production():
    s = Settings(environment="production", jwt_secret="a-real-secret-0123456789abcdef")
    assert s.environment == "production"


@pytest.mark.parametrize(
    "field", ["access_token_expire_seconds", "refresh_token_expire_seconds"]
)
def test_non_positive_lifetime_rejected(field):
    with pytest.raises(ValidationError, match="positive"):
        Settings(**{field: 0})


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("TASKTRACK_DEFAULT_TASK_PAGE_SIZE", "5")
    assert Settings().default_task_page_size == 5
