"""Convert a flat JSON object into a Remote Config template."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

from ..exceptions import ConfigurationError

DEFAULT_USER_EMAIL = "firebase-tools-cli@example.com"

# Keys of the input that describe the template rather than parameters
RESERVED_KEYS = frozenset({"conditions", "version"})

DEFAULT_CONDITIONS: tuple[dict[str, str], ...] = (
    {
        "name": "iOS",
        "expression": "app.id == 'your.ios.app.id'",
        "tagColor": "PINK",
    },
    {
        "name": "Android",
        "expression": "app.id == 'your.android.app.id'",
        "tagColor": "GREEN",
    },
)


def value_type(value: Any) -> str:
    """Remote Config ``valueType`` for a JSON value."""
    if isinstance(value, bool):
        return "BOOLEAN"
    if isinstance(value, int | float):
        return "NUMBER"
    if value is None or isinstance(value, dict | list):
        return "JSON"
    return "STRING"


def default_value(value: Any) -> str:
    """Remote Config stores every default as a string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if value is None or isinstance(value, dict | list):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def convert_to_remote_config(
    data: Any,
    *,
    version_number: str = "1",
    user_email: str = DEFAULT_USER_EMAIL,
    description: str | None = None,
    add_conditions: bool = False,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Build a Remote Config template from *data*.

    Each top-level key other than ``conditions`` and ``version`` becomes a
    parameter whose default value is the stringified input value.

    Raises:
        ConfigurationError: If *data* is not a JSON object.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Remote Config input must be a JSON object, got {type(data).__name__}"
        )

    parameters: dict[str, Any] = {}
    for key, value in data.items():
        if key in RESERVED_KEYS:
            continue
        parameter: dict[str, Any] = {
            "defaultValue": {"value": default_value(value)},
            "valueType": value_type(value),
        }
        if description:
            parameter["description"] = f"{description} - {key}"
        parameters[key] = parameter

    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    return {
        "conditions": [dict(c) for c in DEFAULT_CONDITIONS] if add_conditions else [],
        "parameters": parameters,
        "version": {
            "versionNumber": str(version_number),
            "updateTime": timestamp,
            "updateUser": {"email": user_email},
            "updateOrigin": "CONSOLE",
            "updateType": "INCREMENTAL_UPDATE",
        },
    }


def default_output_name(now: datetime | None = None) -> str:
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    return f"remote_config_{stamp.replace(':', '-').replace('.', '-')}.json"
