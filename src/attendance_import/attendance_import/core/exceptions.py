class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class SpreadsheetReadError(DomainError):
    """Raised when an uploaded file cannot be turned into attendance rows."""


class WorkerError(DomainError):
    """Base class for failures of an isolated batch worker."""


class WorkerTimeoutError(WorkerError):
    """Raised when a worker does not answer within the configured timeout."""


class WorkerCrashedError(WorkerError):
    """Raised when a worker process exits without sending a result."""
