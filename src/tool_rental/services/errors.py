"""Custom service layer errors."""


class ServiceError(Exception):
    """Base error for service-layer failures."""


class ValidationError(ServiceError):
    """Raised when form input breaks a business rule."""


class ImportFormatError(ServiceError):
    """Raised when a spreadsheet cannot be imported at all."""
