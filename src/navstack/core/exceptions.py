"""
navstack exception hierarchy.

All navstack exceptions inherit from NavstackError, so callers can catch
library-level errors in one place while still telling failure modes apart.
"""


class NavstackError(Exception):
    """Base exception class for all navstack errors."""


class ConfigurationError(NavstackError):
    """Raised for configuration errors (missing keys, invalid values)."""


class APIError(NavstackError):
    """Raised for HTTP API communication errors."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ValidationError(NavstackError):
    """Raised when request data is rejected before any I/O happens."""


class MissingFieldError(ValidationError):
    """Raised when required fields are absent or empty."""

    def __init__(self, fields: list[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required field(s): {', '.join(self.fields)}")


class DocumentFormatError(NavstackError):
    """Raised when YAML text does not describe a taxonomy document."""


class NotFoundError(NavstackError):
    """Raised when the target of an operation does not exist."""


class LinkNotFoundError(NotFoundError):
    """Raised when no link with the requested title exists in a document."""

    def __init__(self, title: str, filename: str = ""):
        self.title = title
        self.filename = filename
        where = f" in {filename}" if filename else ""
        super().__init__(f"No link titled '{title}'{where}")


class FileIOError(NavstackError):
    """Raised for local file I/O errors."""


class ExportError(NavstackError):
    """Raised when a bookmark export cannot be completed."""
