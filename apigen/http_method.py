"""HTTP methods that can be registered on a mock server."""

from __future__ import annotations

from enum import Enum

_EXPECTED = "one of GET, POST, PUT, PATCH and DELETE."


class HttpMethod(str, Enum):
    """An HTTP method, rendered and parsed as its upper-case name."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: object) -> HttpMethod:
        """Parse a method name case-insensitively; raise ValueError if unknown."""
        if isinstance(value, HttpMethod):
            return value
        if not isinstance(value, str):
            raise ValueError(f"invalid type: {value!r}, expected {_EXPECTED}")
        upper = value.upper()
        try:
            return cls(upper)
        except ValueError:
            raise ValueError(
                f'invalid type: string "{upper}", expected {_EXPECTED}'
            ) from None