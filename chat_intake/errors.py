from __future__ import annotations


class IntakeError(Exception):
    """Base error for the chat intake service."""

    status_code = 500
    public_message = "internal"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.public_message)
        self.message = message or self.public_message


class ValidationError(IntakeError):
    """Malformed or missing request fields. Surfaced to the caller verbatim."""

    status_code = 400
    public_message = "invalid request"


class UpstreamError(IntakeError):
    """The generative backend, a store, or the lead webhook failed."""

    status_code = 500
    public_message = "upstream failure"


class InternalError(IntakeError):
    """Unexpected fault. Details stay in the server log."""

    status_code = 500
    public_message = "internal"
