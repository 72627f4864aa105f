"""Tests for the settings validation rules."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from civicmail.config import Settings


def test_sendgrid_settings_must_be_provided_together() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, sendgrid_api_key="SG.fake", sendgrid_sender=None)


def test_sendgrid_sender_must_be_an_address() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, sendgrid_api_key="SG.fake", sendgrid_sender="noreply")


def test_defaults() -> None:
    settings = Settings(_env_file=None, database_url="sqlite://")

    assert settings.app_name == "Consul"
    assert settings.digest_max_workers >= 1
    assert settings.notification_retention_days > 0
