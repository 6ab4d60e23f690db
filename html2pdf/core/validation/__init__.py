"""
Validation Module
=================

Validation of incoming conversion request bodies.
"""

from .validator import ConversionValidationError, ValidationErrorKind, validate_conversion_request

__all__ = [
    "ConversionValidationError",
    "ValidationErrorKind",
    "validate_conversion_request",
]
