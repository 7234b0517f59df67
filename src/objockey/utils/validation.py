"""Validation utilities for operation arguments."""

from typing import Any, List
from ..types import ValidationResult, ValidationError, ErrorType


class ValidationUtils:
    """Utility class for validating arguments passed to JsonValue."""

    @staticmethod
    def validate_predicates(predicates: Any) -> ValidationResult:
        """
        Validate a list or tuple of predicate callbacks.

        Args:
            predicates: Object expected to be a list or tuple of callables

        Returns:
            ValidationResult with validation details
        """
        errors = []

        if not isinstance(predicates, (list, tuple)):
            errors.append(ValidationError(
                type=ErrorType.ARGUMENT,
                message='"predicates" must be a sequence of functions.',
                location="predicates"
            ))
            return ValidationResult(is_valid=False, errors=errors, warnings=[])

        for i, predicate in enumerate(predicates):
            if not callable(predicate):
                errors.append(ValidationError(
                    type=ErrorType.ARGUMENT,
                    message='"predicates" must be a sequence of functions.',
                    location=f"predicates[{i}]"
                ))

        warnings = [] if predicates else ["No predicates given; result will be empty."]

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=warnings
        )

    @staticmethod
    def validate_buffer(buffer: Any) -> ValidationResult:
        """
        Validate a replacement payload for JsonValue.set().

        Args:
            buffer: JSON text, list or dict

        Returns:
            ValidationResult with validation details
        """
        errors = []

        if not isinstance(buffer, (str, list, dict)):
            errors.append(ValidationError(
                type=ErrorType.ARGUMENT,
                message='"buffer" must be of type str, dict, or list.',
                location="buffer"
            ))

        return ValidationResult(
            is_valid=len(errors) == 0,
            errors=errors,
            warnings=[]
        )

    @staticmethod
    def is_number(value: Any) -> bool:
        """Return True for int and float values, excluding bool."""
        return isinstance(value, (int, float)) and not isinstance(value, bool)

    @staticmethod
    def error_messages(result: ValidationResult) -> List[str]:
        """Collect error messages from a validation result."""
        return [error.message for error in result.errors]
