"""JsonValue: a callback-driven wrapper around one JSON sequence or mapping."""

import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import click

from .parser import JSONParser
from .types import (
    InvalidArgument,
    JsonData,
    JsonContainer,
    MergeShapeConflict,
    ParseError,
    Shape,
    Sink,
    TypeMismatch,
    Visitor,
)
from .utils.validation import ValidationUtils


def _default_sink(value: Any) -> None:
    """Write a value to standard error."""
    click.echo(value, err=True)


class JsonValue:
    """
    Owner of a single JSON-shaped value.

    The payload is either a list (sequence) or a dict (mapping), or unset.
    Every callback-driven operation treats both shapes the same way, only
    the meaning of the callback arguments changes:

      sequence: ``callback(value, position, payload)``
      mapping:  ``callback(key, value, payload)``

    Transformations (``filter``, ``map``, ``condense_map``) return new
    containers; mutators (``push``, ``replace``, ``replace_value``, ``set``)
    change the payload and return ``self`` so calls can be chained.
    """

    def __init__(self, source: Any = "", sink: Optional[Sink] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the wrapper.

        Args:
            source: JSON text, a list, a dict, or "" for an empty wrapper
            sink: Optional output function used by print()
            logger: Optional logger instance

        Raises:
            ParseError: If source is malformed JSON text
        """
        self.logger = logger or logging.getLogger(__name__)
        self.parser = JSONParser(self.logger)
        self.sink: Sink = sink or _default_sink
        self._payload: Optional[JsonContainer] = None

        if isinstance(source, (list, dict)):
            self._payload = source
            return

        if isinstance(source, str) and source == "":
            return

        # Only ParseError escapes; any other failure leaves the payload unset.
        try:
            self._payload, shape = self.parser.parse(source)
        except ParseError:
            raise
        except Exception as e:
            self.logger.debug(f"Ignoring non-syntax parse failure: {type(e).__name__}: {e}")
            return

        self.logger.debug(f"Constructed {shape.value} payload from JSON text")

    # Shape predicates

    @property
    def payload(self) -> Optional[JsonContainer]:
        """The wrapped list or dict, or None when unset."""
        return self._payload

    @property
    def shape(self) -> Shape:
        """Shape tag of the current payload."""
        return JSONParser.detect_shape(self._payload)

    def is_sequence(self) -> bool:
        """Return True if the payload is a list."""
        return self.shape is Shape.SEQUENCE

    def is_mapping(self) -> bool:
        """Return True if the payload is a dict."""
        return self.shape is Shape.MAPPING

    def _entries(self) -> Iterator[Tuple[Any, Any, JsonContainer]]:
        """
        Yield callback argument triples for the current payload.

        Sequences yield ``(value, position, payload)`` and mappings yield
        ``(key, value, payload)``. An unset payload yields nothing.
        """
        payload = self._payload
        shape = self.shape

        if shape is Shape.SEQUENCE:
            for i, value in enumerate(list(payload)):
                yield value, i, payload
        elif shape is Shape.MAPPING:
            for key, value in list(payload.items()):
                yield key, value, payload

    def _empty_like(self) -> JsonContainer:
        return [] if self.is_sequence() else {}

    # Search

    def find_index(self, predicate: Visitor) -> Union[int, str]:
        """
        Locate the first element or entry satisfying a predicate.

        Args:
            predicate: Boolean-returning visitor callback

        Returns:
            The first matching position (sequence) or key (mapping), or -1
        """
        for first, second, payload in self._entries():
            if predicate(first, second, payload):
                return second if self.is_sequence() else first
        return -1

    def find_all_indexes(self, predicate: Visitor) -> Optional[List[Union[int, str]]]:
        """
        Locate every element or entry satisfying a predicate.

        Args:
            predicate: Boolean-returning visitor callback

        Returns:
            Positions or keys in container order, or None if nothing matched
        """
        is_sequence = self.is_sequence()
        indexes = [
            second if is_sequence else first
            for first, second, payload in self._entries()
            if predicate(first, second, payload)
        ]
        return indexes if indexes else None

    def find_indexes_2d(self, predicates: Sequence[Visitor]) -> List[Optional[List[Union[int, str]]]]:
        """
        Run several predicates and group their matches.

        Args:
            predicates: List or tuple of boolean-returning visitor callbacks

        Returns:
            One entry per predicate, in order: its positions/keys, or None

        Raises:
            InvalidArgument: If predicates is not a list or tuple of callables
        """
        validation = ValidationUtils.validate_predicates(predicates)
        if not validation.is_valid:
            raise InvalidArgument(
                "; ".join(ValidationUtils.error_messages(validation)),
                context=[error.location for error in validation.errors]
            )
        for warning in validation.warnings:
            self.logger.debug(warning)

        return [self.find_all_indexes(predicate) for predicate in predicates]

    # Arithmetic

    def _numbers(self, selector: Visitor) -> List[Union[int, float]]:
        results = (selector(*args) for args in self._entries())
        return [result for result in results if ValidationUtils.is_number(result)]

    def average(self, selector: Visitor) -> float:
        """
        Average the numeric results of a selector.

        Non-numeric selector results are skipped. With no numeric results
        the average is nan rather than an error.
        """
        numbers = self._numbers(selector)
        if not numbers:
            return float("nan")
        return sum(numbers) / len(numbers)

    def median(self, selector: Visitor) -> List[Optional[Union[int, float]]]:
        """
        Find the middle of the numeric results of a selector.

        The results are sorted ascending. An odd count returns
        ``[m[n // 2]]``; an even count returns ``[m[n // 2], m[n // 2 + 1]]``,
        which is one position past the textbook median pair. Positions past
        the end come back as None.
        """
        matched = sorted(self._numbers(selector))
        middle = len(matched) // 2

        def at(position: int) -> Optional[Union[int, float]]:
            return matched[position] if position < len(matched) else None

        if len(matched) % 2 == 0:
            return [at(middle), at(middle + 1)]
        return [at(middle)]

    # Filtering

    def filter(self, predicate: Visitor) -> JsonContainer:
        """
        Build a new container from the elements matching a predicate.

        The payload is not modified; chain with ``set()`` to keep the result.
        """
        filtered = self._empty_like()

        for first, second, payload in self._entries():
            if predicate(first, second, payload):
                if isinstance(filtered, list):
                    filtered.append(first)
                else:
                    filtered[first] = second

        return filtered

    # Data manipulation

    @staticmethod
    def _mergeable(data: Any) -> Dict[str, Any]:
        if not isinstance(data, dict):
            raise MergeShapeConflict(
                f"Cannot map a value of type {type(data).__name__} "
                f"to a payload of type dict.",
                context={"value": data}
            )
        return data

    def map(self, transform: Visitor) -> JsonContainer:
        """
        Transform every element into a new container.

        For a sequence each result is appended, None included. For a mapping
        each result must be a dict whose entries are merged into the new
        mapping; a None result becomes ``{key: None}``.

        Raises:
            MergeShapeConflict: If a mapping transform returns a non-dict
        """
        mapped = self._empty_like()

        for first, second, payload in self._entries():
            data = transform(first, second, payload)
            if isinstance(mapped, list):
                mapped.append(data)
            else:
                mapped.update(self._mergeable({first: None} if data is None else data))

        return mapped

    def condense_map(self, transform: Visitor) -> JsonContainer:
        """
        Transform every element, dropping None results.

        Raises:
            MergeShapeConflict: If a mapping transform returns a non-dict
        """
        condensed = self._empty_like()

        for first, second, payload in self._entries():
            data = transform(first, second, payload)
            if data is None:
                continue
            if isinstance(condensed, list):
                condensed.append(data)
            else:
                condensed.update(self._mergeable(data))

        return condensed

    def for_each(self, action: Visitor) -> "JsonValue":
        """Call an action for every element, for its side effects."""
        for args in self._entries():
            action(*args)
        return self

    # Mutation

    def push(self, addition: Any) -> "JsonValue":
        """
        Push data onto the payload.

        A list pushed onto a list is concatenated and a dict pushed onto a
        dict is merged, incoming keys winning. Anything else pushed onto a
        list is appended as a single element.

        Raises:
            TypeMismatch: If the payload is not a list and the addition
                cannot be combined with it
        """
        if isinstance(addition, list) and self.is_sequence():
            self._payload = [*self._payload, *addition]
        elif isinstance(addition, dict) and self.is_mapping():
            self._payload = {**self._payload, **addition}
        elif self.is_sequence():
            self._payload.append(addition)
        elif type(addition) is not type(self._payload):
            raise TypeMismatch(
                f"Cannot push data of type {type(addition).__name__} "
                f"to a payload of type {type(self._payload).__name__}"
            )

        self.logger.debug(f"Pushed {type(addition).__name__} onto {self.shape.value} payload")
        return self

    def _check_replaceable(self, key: Any) -> None:
        if self.shape is Shape.EMPTY:
            raise InvalidArgument("Cannot replace a value in an empty payload.")
        if self.is_sequence() and not self._is_position(key):
            raise InvalidArgument(
                f"Sequence positions must be non-negative integers, got {key!r}."
            )

    @staticmethod
    def _is_position(key: Any) -> bool:
        return isinstance(key, int) and not isinstance(key, bool) and key >= 0

    def _element_at(self, key: Union[int, str]) -> Any:
        """Return the element at a position or key, or None when missing."""
        if self.is_mapping():
            return self._payload.get(key)
        if self.is_sequence() and self._is_position(key) and key < len(self._payload):
            return self._payload[key]
        return None

    def replace(self, key: Union[int, str], transform: Any) -> "JsonValue":
        """
        Replace the value at a position or key with ``transform(current)``.

        A missing mapping key is passed to the transform as None. Use
        ``replace_value()`` to write a plain value.

        Raises:
            InvalidArgument: If transform is not callable, the payload is unset,
                or a sequence position is not a non-negative integer
            IndexError: If a sequence position is out of range
        """
        if not callable(transform):
            raise InvalidArgument(
                f'"transform" must be callable, got {type(transform).__name__}; '
                f"use replace_value() for plain values."
            )
        self._check_replaceable(key)

        if self.is_mapping():
            self._payload[key] = transform(self._payload.get(key))
        else:
            self._payload[key] = transform(self._payload[key])
        return self

    def replace_value(self, key: Union[int, str], value: JsonData) -> "JsonValue":
        """Replace the value at a position or key with a plain value."""
        self._check_replaceable(key)
        self._payload[key] = value
        return self

    def set(self, buffer: Union[str, JsonContainer]) -> "JsonValue":
        """
        Overwrite the payload.

        Args:
            buffer: JSON text to parse, or a list or dict to adopt

        Raises:
            ParseError: If buffer is malformed JSON text
            InvalidArgument: If buffer is neither text, list nor dict
        """
        validation = ValidationUtils.validate_buffer(buffer)
        if not validation.is_valid:
            raise InvalidArgument("; ".join(ValidationUtils.error_messages(validation)))

        if isinstance(buffer, str):
            self._payload, _ = self.parser.parse(buffer)
        else:
            self._payload = buffer

        self.logger.debug(f"Payload set to {self.shape.value}")
        return self

    # Serialization

    def to_text(self) -> str:
        """Return the payload as compact JSON text, or "" when unset."""
        if self._payload is None:
            return ""
        return self.parser.dumps(self._payload)

    string = to_text

    # Printing

    def print(self, key: Optional[Union[int, str]] = None) -> "JsonValue":
        """
        Send the payload, or one element of it, to the sink.

        A falsy key (including position 0) prints the whole payload. A
        missing key or position sends None.
        """
        if key:
            self.sink(self._element_at(key))
        else:
            self.sink(self._payload)
        return self

    def set_sink(self, fn: Optional[Sink] = None) -> "JsonValue":
        """Replace the print sink; no argument restores the default."""
        self.sink = fn or _default_sink
        return self

    set_print = set_sink

    # Coercion

    def value_of(self) -> Optional[JsonContainer]:
        """Return the raw payload."""
        return self._payload

    def __add__(self, other: Any) -> Any:
        return self._payload + other

    def __radd__(self, other: Any) -> Any:
        return other + self._payload

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"JsonValue({self.shape.value}: {self.to_text()!r})"
