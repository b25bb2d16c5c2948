class MediFiError(Exception):
    """Base class for errors raised by the record, grant and provider services.

    `field` names the offending input where it is known, so the HTTP layer can
    report it back to the caller.
    """

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def details(self) -> list[dict]:
        return [{"field": self.field or "", "message": self.message}]


class ValidationError(MediFiError):
    """Malformed or missing required input."""


class NotFoundError(MediFiError):
    """Referenced entity does not exist."""


class ConflictError(MediFiError):
    """Duplicate record, duplicate provider wallet or duplicate active grant."""


class UploadError(MediFiError):
    """The content storage service rejected or failed to store a file."""
