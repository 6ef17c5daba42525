"""
Exceptions Module

This module defines the error taxonomy shared by the gateway, the HTTP API
and the MCP tools. Every error carries the HTTP status it maps to.
"""


class ChatRelayError(Exception):
    """Base class for all Chat Relay errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ConfigError(ChatRelayError):
    """Missing or malformed service account key. Fatal at startup."""

    status_code = 500


class ValidationError(ChatRelayError):
    """A required request field is missing or empty."""

    status_code = 400


class ResolutionError(ChatRelayError):
    """No direct message space exists between the bot and the user."""

    status_code = 400


class RemoteError(ChatRelayError):
    """The Google Chat API or the token endpoint reported a failure."""

    status_code = 500
