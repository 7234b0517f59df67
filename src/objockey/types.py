"""Core type definitions for Objockey."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union


JsonScalar = Union[None, bool, int, float, str]
JsonData = Union[JsonScalar, List[Any], Dict[str, Any]]
JsonContainer = Union[List[Any], Dict[str, Any]]

# callback(value, position, payload) for sequences
SequenceVisitor = Callable[[Any, int, List[Any]], Any]
# callback(key, value, payload) for mappings
MappingVisitor = Callable[[str, Any, Dict[str, Any]], Any]
Visitor = Union[SequenceVisitor, MappingVisitor]

Sink = Callable[[Any], Any]


class Shape(Enum):
    """Enumeration of payload shapes."""
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    EMPTY = "empty"


class ErrorType(Enum):
    """Enumeration of error types."""
    SYNTAX = "syntax"
    ARGUMENT = "argument"
    TYPE = "type"
    MERGE = "merge"


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of argument validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


class ObjockeyError(Exception):
    """Base exception for Objockey operations."""

    error_type = ErrorType.ARGUMENT

    def __init__(self, message: str, error_type: Optional[ErrorType] = None,
                 context: Optional[Any] = None):
        super().__init__(message)
        if error_type is not None:
            self.error_type = error_type
        self.context = context


class ParseError(ObjockeyError, ValueError):
    """Raised when JSON text is malformed or has a non-container root."""

    error_type = ErrorType.SYNTAX


class InvalidArgument(ObjockeyError, TypeError):
    """Raised when an operation receives an argument of the wrong shape."""

    error_type = ErrorType.ARGUMENT


class TypeMismatch(ObjockeyError, TypeError):
    """Raised when pushed data cannot be combined with the payload."""

    error_type = ErrorType.TYPE


class MergeShapeConflict(ObjockeyError):
    """Raised when a transform result cannot be merged into a mapping."""

    error_type = ErrorType.MERGE
