"""Mock HTTP API server: register JSON responses on any port at runtime."""

__version__ = "0.1.0"