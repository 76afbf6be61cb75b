"""Schema and application version metadata for result files."""

from __future__ import annotations

from typing import Any, Dict

SCHEMA_VERSION = "1.0.0"
APP_VERSION = "0.3.0"


def make_envelope(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Wrap a result payload with schema/app versions for serialization."""
    return {
        "schema_version": SCHEMA_VERSION,
        "app_version": APP_VERSION,
        "payload": payload,
    }


def unwrap_envelope(data: Dict[str, Any]) -> Dict[str, Any]:
    """Return the payload of an enveloped document.

    Files written by the benchmark player itself carry no envelope and are
    returned unchanged.
    """
    if "payload" in data and isinstance(data["payload"], dict):
        return data["payload"]
    return data
