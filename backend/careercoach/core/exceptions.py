"""Custom exceptions for the career coach backend."""


class CareerCoachError(Exception):
    """Base exception for all application errors."""
    pass


class UnauthorizedError(CareerCoachError):
    """Raised when an operation is attempted without a caller identity."""
    pass


class NotFoundError(CareerCoachError):
    """Raised when a referenced entity does not exist."""
    pass


class ValidationError(CareerCoachError):
    """Raised when data validation fails."""
    pass


class PersistenceFailedError(CareerCoachError):
    """Raised when a store read or write fails."""
    pass


class ServiceError(CareerCoachError):
    """Base exception for text-generation service errors."""
    pass


class RateLimitedError(ServiceError):
    """Raised when the text-generation service rejects a call for quota reasons."""
    pass


class ModelNotAvailableError(ServiceError):
    """Raised when the configured model is unknown or the service is misconfigured."""
    pass


class GenerationFailedError(ServiceError):
    """Raised when a structured document could not be produced."""
    pass


class MalformedResponseError(GenerationFailedError):
    """Raised when generated text cannot be parsed into a structured document."""
    pass
