"""Failure taxonomy for catalog API calls and user-facing error messages.

Every failure raised by the transport derives from ``ApiFailure``. Panels turn
any failure into exactly one display string with ``to_user_message``, which
recognises the server's error payloads by their structure alone:

* field-validation shape: ``{"title": ..., "errors": {"Field": ["msg", ...]}}``
* problem-description shape: ``{"title": ..., "detail": ...}``
* a plain string body
"""

import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "Unknown error"
NETWORK_ERROR = "Network error"


class ApiFailure(Exception):
    """A request to the catalog API did not produce a usable response."""

    def __init__(
        self,
        message: str = "",
        status_code: int | None = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body


class CancelledFailure(ApiFailure):
    """The request was superseded by a newer selection and abandoned."""

    def __init__(self, message: str = "Request cancelled"):
        super().__init__(message)


class ValidationFailure(ApiFailure):
    """The server rejected the request (4xx)."""


class TransportFailure(ApiFailure):
    """The server was unreachable, timed out, or failed (5xx)."""


def failure_from_response(response) -> ApiFailure:
    """Build the failure matching an error response."""
    status = response.status_code
    body = _read_body(response)
    message = f"HTTP {status}"
    if status is not None and 400 <= status < 500:
        return ValidationFailure(message, status_code=status, body=body)
    return TransportFailure(message, status_code=status, body=body)


def _read_body(response) -> Any:
    """Decode an error body as JSON, falling back to its text."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def _optional_str(value: Any) -> bool:
    return value is None or isinstance(value, str)


def _is_problem_description(body: Any) -> bool:
    if not _is_mapping(body):
        return False
    return _optional_str(body.get("title")) and _optional_str(body.get("detail"))


def _is_field_validation(body: Any) -> bool:
    if not _is_problem_description(body):
        return False
    errors = body.get("errors")
    if not _is_mapping(errors):
        return False
    return all(
        isinstance(messages, list) and all(isinstance(m, str) for m in messages)
        for messages in errors.values()
    )


def _first_field_error(body: Mapping) -> str | None:
    for messages in body["errors"].values():
        if messages:
            return messages[0]
    return None


def _status_message(status: int | None) -> str:
    return f"HTTP error {status if status is not None else '?'}"


def to_user_message(err: object) -> str:
    """Reduce any failure to a single message suitable for display."""
    if not isinstance(err, ApiFailure):
        return UNKNOWN_ERROR

    status = err.status_code
    body = err.body

    if _is_field_validation(body):
        return _first_field_error(body) or body.get("title") or _status_message(status)

    if _is_problem_description(body):
        title = body.get("title")
        detail = body.get("detail")
        if title and detail:
            return f"{title}: {detail}"
        if title:
            return title

    if isinstance(body, str) and body.strip():
        return body

    if status:
        return _status_message(status)

    return err.message or NETWORK_ERROR
