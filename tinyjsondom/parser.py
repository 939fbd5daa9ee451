"""A tolerant JSON parser that fills arrays and objects from a JSON buffer."""

from __future__ import annotations

from typing import Any

from .containers import JsonArray, JsonObject
from .variant import JsonVariant, Unparsed

DEFAULT_NESTING_LIMIT = 10

_SPACES = " \t\r\n"
_QUOTES = "\"'"
_UNQUOTED_EXTRA = "+-._"
_UNESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t"}


def skip_spaces_and_comments(text: str, pos: int) -> int:
    """Return the index of the first character at or after ``pos`` that is
    neither white space nor part of a ``/* */`` or ``//`` comment."""
    length = len(text)
    while pos < length:
        char = text[pos]
        if char in _SPACES:
            pos += 1
        elif text.startswith("/*", pos):
            end = text.find("*/", pos + 2)
            if end < 0:
                return length
            pos = end + 2
        elif text.startswith("//", pos):
            end = text.find("\n", pos + 2)
            if end < 0:
                return length
            pos = end + 1
        else:
            return pos
    return pos


def _is_unquoted_char(char: str) -> bool:
    return (char.isascii() and char.isalnum()) or char in _UNQUOTED_EXTRA


class JsonParser:
    """Reads JSON text into containers allocated from ``buffer``.

    Strings may be double-quoted, single-quoted or bare; comments are skipped.
    The nesting limit bounds how deeply containers may be nested.
    """

    def __init__(
        self, buffer: Any, json: str | None, nesting_limit: int = DEFAULT_NESTING_LIMIT
    ) -> None:
        text = json or ""
        terminator = text.find("\0")
        if terminator >= 0:
            text = text[:terminator]
        self._buffer = buffer
        self._text = text
        self._pos = 0
        self._nesting_limit = nesting_limit

    def _char_at(self, pos: int) -> str:
        return self._text[pos] if pos < len(self._text) else ""

    def _skip(self, char: str) -> bool:
        pos = skip_spaces_and_comments(self._text, self._pos)
        if self._char_at(pos) != char:
            return False
        self._pos = skip_spaces_and_comments(self._text, pos + 1)
        return True

    def parse_array(self) -> JsonArray:
        """Parse an array; the invalid array is returned on any failure."""
        array = self._buffer.create_array()
        if not self._skip("["):
            return JsonArray.invalid()
        if self._skip("]"):
            return array
        while True:
            value = self._parse_anything()
            if value is None or not array.add(value):
                return JsonArray.invalid()
            if self._skip("]"):
                return array
            if not self._skip(","):
                return JsonArray.invalid()

    def parse_object(self) -> JsonObject:
        """Parse an object; the invalid object is returned on any failure."""
        obj = self._buffer.create_object()
        if not self._skip("{"):
            return JsonObject.invalid()
        if self._skip("}"):
            return obj
        while True:
            key = self._parse_string()
            if key is None or not self._skip(":"):
                return JsonObject.invalid()
            value = self._parse_anything()
            if value is None or not obj.set(key, value):
                return JsonObject.invalid()
            if self._skip("}"):
                return obj
            if not self._skip(","):
                return JsonObject.invalid()

    def _parse_anything(self) -> JsonVariant | None:
        if self._nesting_limit == 0:
            return None
        self._nesting_limit -= 1
        try:
            return self._parse_anything_unsafe()
        finally:
            self._nesting_limit += 1

    def _parse_anything_unsafe(self) -> JsonVariant | None:
        self._pos = skip_spaces_and_comments(self._text, self._pos)
        char = self._char_at(self._pos)
        if char == "[":
            array = self.parse_array()
            return JsonVariant(array) if array.success() else None
        if char == "{":
            obj = self.parse_object()
            return JsonVariant(obj) if obj.success() else None
        quoted = char in _QUOTES and char != ""
        text = self._parse_string()
        if text is None:
            return None
        return JsonVariant(text if quoted else Unparsed(text))

    def _parse_string(self) -> str | None:
        text = self._text
        pos = self._pos
        quote = self._char_at(pos)
        if quote == "" or quote not in _QUOTES:
            end = pos
            while end < len(text) and _is_unquoted_char(text[end]):
                end += 1
            self._pos = end
            return text[pos:end]

        pos += 1
        chars: list[str] = []
        while True:
            if pos >= len(text):
                return None
            char = text[pos]
            pos += 1
            if char == quote:
                break
            if char == "\\":
                if pos >= len(text):
                    return None
                char = _UNESCAPES.get(text[pos], text[pos])
                pos += 1
            chars.append(char)
        self._pos = pos
        return "".join(chars)