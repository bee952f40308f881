"""
Domain Exceptions for the Certificate Review service.

Custom exceptions for:
- Analysis record lookups
- Regulatory reference queries
- Payload validation
"""


class DomainError(Exception):
    """Base exception for all domain errors."""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


# =============================================================================
# Analysis Record Exceptions
# =============================================================================

class AnalysisRecordNotFoundError(DomainError):
    """Raised when an analysis record cannot be found."""

    def __init__(self, record_id):
        message = f"Analysis record with id '{record_id}' not found"
        super().__init__(message, code="ANALYSIS_RECORD_NOT_FOUND")
        self.record_id = record_id


class UnknownRecordFieldError(DomainError):
    """Raised when a payload names a field the analysis record does not have."""

    def __init__(self, field_names):
        names = ", ".join(sorted(field_names))
        message = f"Unknown analysis record field(s): {names}"
        super().__init__(message, code="UNKNOWN_RECORD_FIELD")
        self.field_names = sorted(field_names)


# =============================================================================
# Regulatory Reference Exceptions
# =============================================================================

class UnknownCategoryError(DomainError):
    """Raised when a regulatory category is neither petroleum nor natural_gas."""

    def __init__(self, category: str):
        message = (
            f"Unknown regulatory category '{category}'. "
            f"Expected 'petroleum' or 'natural_gas'"
        )
        super().__init__(message, code="UNKNOWN_CATEGORY")
        self.category = category


# =============================================================================
# Validation Exceptions
# =============================================================================

class ValidationError(DomainError):
    """Raised when data validation fails."""

    def __init__(self, field: str, message: str):
        super().__init__(f"Validation failed for '{field}': {message}", code="VALIDATION_ERROR")
        self.field = field
