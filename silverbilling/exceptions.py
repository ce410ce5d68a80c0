"""Custom exception hierarchy for the silver billing engine.

This module defines a structured exception hierarchy so callers can tell
validation problems apart from numeric degeneracy and physically impossible
mixing results.
"""


class SilverBillingError(Exception):
    """Base exception for all silver billing errors."""

    pass


# Validation-related exceptions
class ValidationError(SilverBillingError):
    """Base exception for validation errors."""

    pass


class InvoiceValidationError(ValidationError):
    """Raised when an invoice draft is submitted with field errors."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = list(errors or [])


# Business logic exceptions
class BusinessLogicError(SilverBillingError):
    """Base exception for business logic violations."""

    pass


class CalculationError(BusinessLogicError):
    """Raised when calculation fails or produces invalid results."""

    pass


class InvalidInputError(CalculationError):
    """Raised when inputs make a formula undefined (zero denominators, bad ranges)."""

    pass


class ConstraintViolation(CalculationError):
    """Raised when a mixing result is physically impossible (negative mass to add)."""

    def __init__(self, message, field=None, value=None):
        super().__init__(message)
        self.field = field
        self.value = value


# Configuration exceptions
class ConfigurationError(SilverBillingError):
    """Base exception for configuration-related errors."""

    pass


class SettingsError(ConfigurationError):
    """Raised when settings operation fails."""

    pass


# Network/Service exceptions
class ServiceError(SilverBillingError):
    """Base exception for external service errors."""

    pass


class RateServiceError(ServiceError):
    """Raised when the silver rate provider fails or returns unusable data."""

    pass


class SaleSubmissionError(ServiceError):
    """Raised when the external sale API rejects a submission."""

    pass
