"""
Error taxonomy for the temperature uploader.

Every failure in the pipeline is raised as a subclass of `UploadError` at the
point where it happens; the CLI turns it into a message on stderr and the
process exit code.
"""


class UploadError(RuntimeError):
    """Base class for anything that stops an upload run."""

    exit_code = 1


class InputError(UploadError):
    """Raised when no temperature could be read from stdin."""


class ValidationError(UploadError, ValueError):
    """Raised for a non-finite or unparseable reading, or a bad configuration value."""


class FormattingError(UploadError):
    """Raised when the rendered Observation would not fit the document bound."""


class TransportInitError(UploadError):
    """Raised when the HTTP request cannot be prepared (bad URL, unsupported scheme)."""


class TransportExecutionError(UploadError):
    """Raised when the request/response exchange itself fails."""


class ApplicationError(UploadError):
    """Raised when the server answered with a status outside [200, 300)."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
