"""A tagged value that can hold any JSON scalar or a container reference."""

from __future__ import annotations

import math
import re
from enum import Enum, auto
from typing import Any

from .writer import DummyPrint, DynamicStringBuilder, JsonWriter, Print, format_double

_LONG_MAX = 2**63 - 1
_LONG_MIN = -(2**63)

_C_SPACE = "[ \t\n\v\f\r]*"
_LONG_RE = re.compile(_C_SPACE + r"([+-]?[0-9]+)")
_DOUBLE_RE = re.compile(
    _C_SPACE
    + r"([+-]?)((?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _strtol(text: str) -> tuple[int, int, bool]:
    """Parse a leading base-10 integer: (value, end index, out of range)."""
    match = _LONG_RE.match(text)
    if not match:
        return 0, 0, False
    value = int(match.group(1))
    if value > _LONG_MAX:
        return _LONG_MAX, match.end(), True
    if value < _LONG_MIN:
        return _LONG_MIN, match.end(), True
    return value, match.end(), False


def _strtod(text: str) -> tuple[float, int, bool]:
    """Parse a leading floating-point number: (value, end index, out of range)."""
    match = _DOUBLE_RE.match(text)
    if not match:
        return 0.0, 0, False
    sign, body = match.group(1), match.group(2)
    value = float(sign + body)
    lowered = body.lower()
    literal = lowered.startswith(("inf", "nan"))
    out_of_range = False
    if not literal:
        mantissa = re.split("[eE]", body)[0]
        if math.isinf(value):
            out_of_range = True
        elif value == 0.0 and any(c in "123456789" for c in mantissa):
            out_of_range = True
    return value, match.end(), out_of_range


class JsonVariantType(Enum):
    """What kind of value a variant holds."""

    UNDEFINED = auto()
    UNPARSED = auto()
    STRING = auto()
    BOOLEAN = auto()
    LONG = auto()
    ARRAY = auto()
    OBJECT = auto()
    DOUBLE = auto()


class Unparsed(str):
    """Raw JSON text whose type is decided only when it is read."""

    __slots__ = ()


_UNDEFINED = object()


class JsonVariant:
    """A JSON value: boolean, integer, double, string, raw text or container."""

    __slots__ = ("_type", "_content", "_decimals")

    def __init__(self, value: Any = _UNDEFINED, decimals: int = 2) -> None:
        self._decimals = 2
        if value is _UNDEFINED:
            self._type, self._content = JsonVariantType.UNDEFINED, None
        elif isinstance(value, JsonVariant):
            self._type = value._type
            self._content = value._content
            self._decimals = value._decimals
        elif isinstance(value, bool):
            self._type, self._content = JsonVariantType.BOOLEAN, int(value)
        elif isinstance(value, int):
            self._type, self._content = JsonVariantType.LONG, value
        elif isinstance(value, float):
            self._type, self._content = JsonVariantType.DOUBLE, value
            self._decimals = decimals
        elif isinstance(value, Unparsed):
            self._type, self._content = JsonVariantType.UNPARSED, str(value)
        elif value is None or isinstance(value, str):
            self._type, self._content = JsonVariantType.STRING, value
        else:
            self._init_from_container(value)

    def _init_from_container(self, value: Any) -> None:
        from .containers import (
            JsonArray,
            JsonArraySubscript,
            JsonObject,
            JsonObjectSubscript,
        )

        if isinstance(value, JsonArray):
            self._type, self._content = JsonVariantType.ARRAY, value
        elif isinstance(value, JsonObject):
            self._type, self._content = JsonVariantType.OBJECT, value
        elif isinstance(value, (JsonArraySubscript, JsonObjectSubscript)):
            source = value.variant()
            self._type = source._type
            self._content = source._content
            self._decimals = source._decimals
        else:
            raise TypeError(f"cannot store {type(value).__name__} in a JSON variant")

    def _is_text(self) -> bool:
        return self._type in (JsonVariantType.STRING, JsonVariantType.UNPARSED)

    def as_string(self) -> str | None:
        """The held string, or None for null and non-string values."""
        if self._type is JsonVariantType.UNPARSED and self._content == "null":
            return None
        if self._is_text():
            return self._content
        return None

    def as_double(self) -> float:
        if self._type is JsonVariantType.DOUBLE:
            return self._content
        if self._type in (JsonVariantType.LONG, JsonVariantType.BOOLEAN):
            return float(self._content)
        if self._is_text() and self._content is not None:
            return _strtod(self._content)[0]
        return 0.0

    def as_long(self) -> int:
        if self._type in (JsonVariantType.LONG, JsonVariantType.BOOLEAN):
            return self._content
        if self._type is JsonVariantType.DOUBLE:
            if math.isnan(self._content) or math.isinf(self._content):
                return 0
            return int(self._content)
        if self._is_text() and self._content is not None:
            if self._content == "true":
                return 1
            return _strtol(self._content)[0]
        return 0

    def as_bool(self) -> bool:
        return self.as_long() != 0

    def as_text(self) -> str:
        """The value rendered as text, as a string conversion would give it."""
        if self._is_text() and self._content is not None:
            return self._content
        if self._type in (JsonVariantType.LONG, JsonVariantType.BOOLEAN):
            return str(self._content)
        if self._type is JsonVariantType.DOUBLE:
            return f"{self._content:.{self._decimals}f}"
        return self.to_json()

    def as_array(self):
        if self._type is JsonVariantType.ARRAY:
            return self._content
        from .containers import JsonArray

        return JsonArray.invalid()

    def as_object(self):
        if self._type is JsonVariantType.OBJECT:
            return self._content
        from .containers import JsonObject

        return JsonObject.invalid()

    def is_long(self) -> bool:
        if self._type is JsonVariantType.LONG:
            return True
        if self._type is not JsonVariantType.UNPARSED or self._content is None:
            return False
        _, end, out_of_range = _strtol(self._content)
        return end == len(self._content) and not out_of_range

    def is_double(self) -> bool:
        if self._type is JsonVariantType.DOUBLE:
            return True
        if self._type is not JsonVariantType.UNPARSED or self._content is None:
            return False
        _, end, out_of_range = _strtod(self._content)
        return end == len(self._content) and not out_of_range and not self.is_long()

    def is_bool(self) -> bool:
        return self._type is JsonVariantType.BOOLEAN

    def is_string(self) -> bool:
        return self._type is JsonVariantType.STRING

    def is_array(self) -> bool:
        return self._type is JsonVariantType.ARRAY

    def is_object(self) -> bool:
        return self._type is JsonVariantType.OBJECT

    def success(self) -> bool:
        """False for an undefined value or an invalid container."""
        if self._type is JsonVariantType.UNDEFINED:
            return False
        if self._type in (JsonVariantType.ARRAY, JsonVariantType.OBJECT):
            return self._content.success()
        return True

    def __len__(self) -> int:
        if self._type in (JsonVariantType.ARRAY, JsonVariantType.OBJECT):
            return len(self._content)
        return 0

    def __getitem__(self, key: int | str) -> JsonVariant:
        if isinstance(key, int) and self._type is JsonVariantType.ARRAY:
            if 0 <= key < len(self._content):
                return self._content.get(key)
            return JsonVariant()
        if isinstance(key, str) and self._type is JsonVariantType.OBJECT:
            return self._content.get(key)
        return JsonVariant()

    def write_to(self, writer: JsonWriter) -> None:
        kind = self._type
        if kind in (JsonVariantType.ARRAY, JsonVariantType.OBJECT):
            self._content.write_to(writer)
        elif kind is JsonVariantType.STRING:
            writer.write_string(self._content)
        elif kind is JsonVariantType.UNPARSED:
            writer.write_raw(self._content)
        elif kind is JsonVariantType.LONG:
            writer.write_long(self._content)
        elif kind is JsonVariantType.BOOLEAN:
            writer.write_boolean(self._content != 0)
        elif kind is JsonVariantType.DOUBLE:
            writer.write_double(self._content, self._decimals)

    def print_to(self, sink: Print) -> int:
        """Write compact JSON to ``sink`` and return the number of characters stored."""
        writer = JsonWriter(sink)
        self.write_to(writer)
        return writer.bytes_written()

    def to_json(self) -> str:
        sink = DynamicStringBuilder()
        self.print_to(sink)
        return str(sink)

    def measure_length(self) -> int:
        return self.print_to(DummyPrint())

    def __repr__(self) -> str:
        if self._type is JsonVariantType.DOUBLE:
            return f"JsonVariant({format_double(self._content, self._decimals)})"
        return f"JsonVariant({self._type.name}, {self._content!r})"


def float_with_n_digits(value: float, digits: int) -> JsonVariant:
    return JsonVariant(float(value), digits)


def double_with_n_digits(value: float, digits: int) -> JsonVariant:
    return JsonVariant(float(value), digits)