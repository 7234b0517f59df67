"""
Objockey - callback-driven reading and manipulation of JSON data.

Wraps a single JSON array or object and treats both shapes the same way
for searching, filtering, mapping, aggregating and printing.
"""

from .json_value import JsonValue
from .parser import JSONParser
from .types import (
    ErrorType,
    InvalidArgument,
    MergeShapeConflict,
    ObjockeyError,
    ParseError,
    Shape,
    TypeMismatch,
)

ObjockeyObject = JsonValue

__version__ = "1.0.0"
__all__ = [
    "JsonValue",
    "ObjockeyObject",
    "JSONParser",
    "Shape",
    "ErrorType",
    "ObjockeyError",
    "ParseError",
    "InvalidArgument",
    "TypeMismatch",
    "MergeShapeConflict",
]
