"""Tests for Remote Config template conversion."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from firebase_tools_cli.actions.remote_config import (
    convert_to_remote_config,
    default_output_name,
)
from firebase_tools_cli.exceptions import ConfigurationError

NOW = datetime(2025, 6, 1, 12, 30, tzinfo=timezone.utc)


def test_parameters_by_type() -> None:
    template = convert_to_remote_config(
        {
            "welcome": "Hi",
            "enabled": False,
            "retries": 3,
            "ratio": 2.0,
            "layout": {"cols": 2},
            "conditions": ["ignored"],
            "version": "ignored",
        },
        now=NOW,
    )
    assert template["parameters"] == {
        "welcome": {"defaultValue": {"value": "Hi"}, "valueType": "STRING"},
        "enabled": {"defaultValue": {"value": "false"}, "valueType": "BOOLEAN"},
        "retries": {"defaultValue": {"value": "3"}, "valueType": "NUMBER"},
        "ratio": {"defaultValue": {"value": "2"}, "valueType": "NUMBER"},
        "layout": {"defaultValue": {"value": '{"cols":2}'}, "valueType": "JSON"},
    }
    assert template["conditions"] == []


def test_version_block() -> None:
    template = convert_to_remote_config(
        {}, version_number="7", user_email="ops@example.com", now=NOW
    )
    assert template["version"] == {
        "versionNumber": "7",
        "updateTime": "2025-06-01T12:30:00+00:00",
        "updateUser": {"email": "ops@example.com"},
        "updateOrigin": "CONSOLE",
        "updateType": "INCREMENTAL_UPDATE",
    }


def test_description_and_conditions() -> None:
    template = convert_to_remote_config(
        {"theme": "dark"}, description="App", add_conditions=True, now=NOW
    )
    assert template["parameters"]["theme"]["description"] == "App - theme"
    assert [c["name"] for c in template["conditions"]] == ["iOS", "Android"]


def test_non_object_input_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        convert_to_remote_config(["a", "b"])


def test_default_output_name_is_filesystem_safe() -> None:
    name = default_output_name(NOW)
    assert name.startswith("remote_config_2025-06-01T12-30-00")
    assert name.endswith(".json")
    assert ":" not in name
