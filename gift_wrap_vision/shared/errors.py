class ApplicationError(Exception):
    """Base error for known application failures."""


class InvalidInput(ApplicationError, ValueError):
    """Raised when a caller supplies missing, non-numeric or out-of-range values."""


class InfrastructureError(ApplicationError):
    """Raised when an infrastructure adapter fails."""


class DetectionError(ApplicationError):
    """Base for failures of the estimation stage; recovered with default dimensions."""


class DetectionUnavailable(DetectionError):
    """Raised when detection is requested before the model finished loading."""


class DetectionFailed(DetectionError):
    """Raised when the underlying model invocation throws."""


class NoObjectDetected(DetectionError):
    """Raised when no candidate object is left to measure."""
