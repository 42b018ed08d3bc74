"""JSON envelopes shared by every endpoint.

Successful calls answer ``{"success": true, "message", "data", "meta"?}`` and
failures answer ``{"success": false, "message", "error": {"code", "details"}}``.
Credential-like keys are stripped from both before they leave the process.
"""

import os
from typing import Any, Dict, Optional

from flask import Response, current_app, has_app_context, jsonify

REDACTED_KEYS = frozenset(
    {"password", "password_hash", "secret", "secret_key", "jwt_secret_key"}
)

INTERNAL_ERROR_CODE = "INTERNAL_ERROR"


def _exposes_internal_details() -> bool:
    if not has_app_context():
        return os.getenv("FLASK_DEBUG", "").strip().lower() in {"1", "true", "yes"}
    config = current_app.config
    return bool(config.get("DEBUG") or config.get("TESTING"))


def _redact(value: Any) -> Any:
    if isinstance(value, list):
        return [_redact(item) for item in value]
    if not isinstance(value, dict):
        return value
    return {
        key: _redact(item)
        for key, item in value.items()
        if str(key).strip().lower() not in REDACTED_KEYS
    }


def success_payload(
    message: str,
    data: Any = None,
    meta: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    envelope: Dict[str, Any] = {"success": True, "message": message}
    envelope["data"] = _redact(data)
    if meta is not None:
        envelope["meta"] = _redact(meta)
    return envelope


def error_payload(
    message: str,
    code: str,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    hidden = code == INTERNAL_ERROR_CODE and not _exposes_internal_details()
    return {
        "success": False,
        "message": message,
        "error": {"code": code, "details": {} if hidden else _redact(details or {})},
    }


def json_response(payload: Dict[str, Any], status_code: int) -> Response:
    response = jsonify(payload)
    response.status_code = status_code
    return response


def success_response(
    message: str,
    data: Any = None,
    *,
    status_code: int = 200,
    meta: Optional[Dict[str, Any]] = None,
) -> Response:
    return json_response(success_payload(message, data, meta), status_code)


def error_response(
    message: str,
    code: str,
    *,
    status_code: int,
    details: Optional[Dict[str, Any]] = None,
) -> Response:
    return json_response(error_payload(message, code, details), status_code)
