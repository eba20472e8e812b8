"""Errors reported to clients of the registration API."""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """An error answered to the client as a JSON failure document."""

    failure_type = "Error"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_json(self) -> dict[str, Any]:
        """Return the JSON body that describes this failure."""
        return {
            "status": "FAILED",
            "failureType": self.failure_type,
            "failureMessage": self.message,
        }


class JsonParseError(ApiError):
    """The request body was not valid JSON for the expected shape."""

    failure_type = "MalformedJson"


class ConnectionFailure(ApiError):
    """A mock server could not be started on the requested port."""

    failure_type = "Connection"