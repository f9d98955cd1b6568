"""Custom exception types for domain and API layers."""
from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base app exception."""

    status_code = 500
    public_message = "Internal server error"


class InvalidInputError(AppError):
    """Client-supplied input failed validation; nothing was sent upstream."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.public_message = message


class GatewayRejectedError(AppError):
    """Gateway answered but reported a non-Ok result code."""

    public_message = "Failed to get Accept Hosted token"

    def __init__(self, result_code: str | None, messages: list[dict[str, Any]]):
        super().__init__(f"Gateway returned resultCode={result_code!r}")
        self.result_code = result_code
        self.messages = messages


class UpstreamFailureError(AppError):
    """External integration call failed at the transport or decoding level."""
