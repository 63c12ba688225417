from datetime import timedelta

import pytest
from structlog.testing import capture_logs

from csrftoken.domain.services.csrf.authenticator import Authenticator
from csrftoken.infrastructure.dependency_injection.csrf_dependencies import (
    get_authenticator,
    reset_authenticator,
)


@pytest.fixture(autouse=True)
def csrf_environment(monkeypatch, tmp_path):
    # Run from an empty directory so no stray .env file is picked up
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CSRF_SECRET_KEY", "k" * 64)
    monkeypatch.setenv("CSRF_TOKEN_LENGTH", "24")
    monkeypatch.setenv("CSRF_TOKEN_LIFETIME_SECONDS", "600")
    reset_authenticator()
    yield
    reset_authenticator()


def test_authenticator_built_from_settings():
    # Act
    authenticator = get_authenticator()

    # Assert
    assert isinstance(authenticator, Authenticator)
    assert authenticator.key == b"k" * 64
    assert authenticator.token_length == 24
    assert authenticator.lifetime == timedelta(minutes=10)


def test_authenticator_is_shared():
    assert get_authenticator() is get_authenticator()


def test_initialization_logged():
    with capture_logs() as logs:
        get_authenticator()

    assert logs[0]["event"] == "CSRF authenticator initialized"
    assert logs[0]["token_length"] == 24
    assert "k" * 64 not in str(logs)


def test_reset_picks_up_new_settings(monkeypatch):
    # Arrange
    first = get_authenticator()
    monkeypatch.setenv("CSRF_TOKEN_LENGTH", "40")

    # Act
    reset_authenticator()
    second = get_authenticator()

    # Assert
    assert first is not second
    assert second.token_length == 40


def test_issued_tokens_validate_across_instances():
    token = get_authenticator().generate_token(session="alice")
    reset_authenticator()

    assert get_authenticator().validate_token(session="alice", token=token)
