"""JSON parser with shape detection."""

import json
import logging
from typing import Any, Optional, Tuple
from .types import JsonContainer, ParseError, Shape


class JSONParser:
    """
    JSON parser that only accepts container roots.

    Malformed text and scalar roots both surface as ParseError. Other
    failures from the json module (a non-text source, runaway nesting)
    propagate unchanged so callers can tell them apart.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the JSON parser.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, json_string: Any) -> Tuple[JsonContainer, Shape]:
        """
        Parse JSON text and detect the shape of its root.

        Args:
            json_string: JSON text to parse

        Returns:
            Tuple of (parsed_data, shape)

        Raises:
            ParseError: If the text is invalid JSON or its root is a scalar
        """
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ParseError(
                f"JSON parsing failed: {e.msg} at line {e.lineno}, column {e.colno}",
                context={"line": e.lineno, "column": e.colno}
            ) from e

        shape = self.detect_shape(data)
        if shape is Shape.EMPTY:
            raise ParseError(f"Unsupported root data type: {type(data).__name__}")

        self.logger.debug(f"Parsed JSON with shape: {shape.value}")
        return data, shape

    @staticmethod
    def detect_shape(data: Any) -> Shape:
        """
        Classify a value as a sequence, a mapping, or neither.

        Args:
            data: Value to classify

        Returns:
            Shape enum for the value
        """
        if isinstance(data, list):
            return Shape.SEQUENCE
        elif isinstance(data, dict):
            return Shape.MAPPING
        return Shape.EMPTY

    @staticmethod
    def dumps(data: Any) -> str:
        """Serialize data to compact JSON text."""
        return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
