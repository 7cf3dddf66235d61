"""Errors raised at the boundaries with external services."""

GENERIC_SUBMISSION_FAILURE = "Failed to process donation. Please try again."


class ServiceError(Exception):
    """An external service call failed.

    Parameters
    ----------
    message : str
        User-facing message, taken from the service when it provided one.
    status_code : int, optional
        HTTP status of the failed response, if any.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class CatalogError(ServiceError):
    """The cause catalog could not be loaded."""


class ConfigError(ServiceError):
    """The platform configuration could not be loaded."""


class SubmissionError(ServiceError):
    """The donation service rejected or failed the submission."""


class SubmissionInProgress(RuntimeError):
    """A submission for this basket is already pending."""
