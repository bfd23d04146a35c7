"""
Tests for application settings.
"""

import pytest
from pydantic import ValidationError

from wagerdesk.core.config import AuthSettings, Settings


def test_privileged_emails_default():
    assert AuthSettings().privileged_emails == ["admin@gmail.com"]


def test_owner_field_default():
    assert AuthSettings().owner_field == "user_id"


def test_privileged_emails_from_env(monkeypatch):
    monkeypatch.setenv("AUTH_PRIVILEGED_EMAILS", '["ops@wagerdesk.io", "cfo@wagerdesk.io"]')

    assert AuthSettings().privileged_emails == ["ops@wagerdesk.io", "cfo@wagerdesk.io"]


def test_privileged_emails_can_be_disabled(monkeypatch):
    monkeypatch.setenv("AUTH_PRIVILEGED_EMAILS", "[]")

    assert AuthSettings().privileged_emails == []


def test_invalid_environment_rejected():
    with pytest.raises(ValidationError):
        Settings(environment="qa")


def test_invalid_log_format_rejected():
    with pytest.raises(ValidationError):
        Settings(log_format="xml")


def test_environment_flags():
    assert Settings(environment="production").is_production
    assert Settings(environment="development").is_development
