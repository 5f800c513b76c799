"""Error taxonomy shared by services and rendered by the API layer."""

from __future__ import annotations


class EditAIError(Exception):
    """Base class for errors that map onto a structured API response."""

    kind = "error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_payload(self) -> dict[str, str]:
        return {"error": self.kind, "message": self.message}


class ValidationError(EditAIError):
    """Missing or invalid submission fields and malformed input."""

    kind = "validation_error"
    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class PayloadTooLargeError(ValidationError):
    kind = "payload_too_large"
    status_code = 413


class NotFoundError(EditAIError):
    kind = "not_found"
    status_code = 404


class InvalidTransitionError(EditAIError):
    """A payment status change that would move the lifecycle backwards."""

    kind = "invalid_transition"
    status_code = 409


class StorageError(EditAIError):
    kind = "storage_error"
    status_code = 500


class ExternalToolError(EditAIError):
    """The editing automation command failed or timed out.

    Never fatal: services convert it into an unconfirmed result.
    """

    kind = "external_tool_error"
    status_code = 502
