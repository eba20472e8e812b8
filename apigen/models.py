"""Data exchanged by the registration API."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from apigen.errors import JsonParseError
from apigen.http_method import HttpMethod


def _object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise JsonParseError(
            f"invalid type: {json.dumps(data)}, expected a JSON object"
        )
    return data


def _field(data: dict[str, Any], name: str) -> Any:
    if name not in data:
        raise JsonParseError(f"missing field `{name}`")
    return data[name]


def _string(data: dict[str, Any], name: str) -> str:
    value = _field(data, name)
    if not isinstance(value, str):
        raise JsonParseError(
            f"invalid type: {json.dumps(value)}, expected a string for field `{name}`"
        )
    return value


def _method(data: dict[str, Any]) -> HttpMethod:
    try:
        return HttpMethod.parse(_field(data, "method"))
    except ValueError as err:
        raise JsonParseError(str(err)) from None


@dataclass(frozen=True)
class Registration:
    """A response registered for a method and path."""

    method: HttpMethod
    path: str
    response: Any

    def to_json(self) -> dict[str, Any]:
        return {
            "method": str(self.method),
            "path": self.path,
            "response": self.response,
        }

    @classmethod
    def from_json(cls, data: Any) -> Registration:
        data = _object(data)
        return cls(
            method=_method(data),
            path=_string(data, "path"),
            response=_field(data, "response"),
        )


@dataclass(frozen=True)
class ServerRegistration:
    """All registrations served on one port."""

    port: str
    registrations: list[Registration] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        return {
            "port": self.port,
            "registrations": [r.to_json() for r in self.registrations],
        }

    @classmethod
    def from_json(cls, data: Any) -> ServerRegistration:
        data = _object(data)
        port = _string(data, "port")
        items = _field(data, "registrations")
        if not isinstance(items, list):
            raise JsonParseError(
                "invalid type: expected a list for field `registrations`"
            )
        return cls(port=port, registrations=[Registration.from_json(i) for i in items])


@dataclass(frozen=True)
class RegistrationRequest:
    """A request to serve a response for a method and path on a port."""

    port: str
    path: str
    method: HttpMethod
    response: Any

    @classmethod
    def from_json(cls, data: Any) -> RegistrationRequest:
        """Build a request from decoded JSON; raise JsonParseError if malformed."""
        data = _object(data)
        port = _string(data, "port")
        path = _string(data, "path")
        method = _method(data)
        response = _field(data, "response")
        return cls(port=port, path=path, method=method, response=response)


@dataclass(frozen=True)
class RegistrationResponse:
    """What a registration added and which earlier registration it replaced."""

    added: Registration
    removed: Registration | None = None

    @classmethod
    def from_request(
        cls,
        registration_request: RegistrationRequest,
        removed: Registration | None,
    ) -> RegistrationResponse:
        added = Registration(
            method=registration_request.method,
            path=registration_request.path,
            response=registration_request.response,
        )
        return cls(added=added, removed=removed)

    def to_json(self) -> dict[str, Any]:
        return {
            "added": self.added.to_json(),
            "removed": self.removed.to_json() if self.removed else None,
        }