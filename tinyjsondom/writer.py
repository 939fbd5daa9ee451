"""Character sinks and the low-level JSON token writer."""

from __future__ import annotations

from abc import ABC, abstractmethod

# Magnitude above which doubles are written in scientific notation.
_BIG_DOUBLE = 4294967040.0

_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def format_double(value: float, decimals: int) -> str:
    """Format a double with a fixed number of decimals, or scientifically if huge."""
    if value > _BIG_DOUBLE or value < -_BIG_DOUBLE:
        return "%g" % value
    return f"{value:.{decimals}f}"


class Print(ABC):
    """A sink that accepts characters one at a time."""

    @abstractmethod
    def write(self, char: str) -> int:
        """Write one character and return how many characters were stored."""

    def print(self, text: str) -> int:
        """Write every character of ``text`` and return how many were stored."""
        return sum(self.write(char) for char in text)


class StaticStringBuilder(Print):
    """A sink with a fixed capacity; characters beyond it are dropped."""

    def __init__(self, size: int) -> None:
        self._capacity = size - 1
        self._chars: list[str] = []

    def write(self, char: str) -> int:
        if len(self._chars) >= self._capacity:
            return 0
        self._chars.append(char)
        return 1

    def __str__(self) -> str:
        return "".join(self._chars)


class DynamicStringBuilder(Print):
    """A sink that grows without limit."""

    def __init__(self) -> None:
        self._chars: list[str] = []

    def write(self, char: str) -> int:
        self._chars.append(char)
        return 1

    def __str__(self) -> str:
        return "".join(self._chars)


class DummyPrint(Print):
    """A sink that discards everything but counts it; used to measure output."""

    def write(self, char: str) -> int:
        return 1


class _IndentedPrint(Print):
    """Indents every new line written to the wrapped sink."""

    def __init__(self, sink: Print, indent_size: int = 2) -> None:
        self._sink = sink
        self._indent_size = indent_size
        self._level = 0
        self._new_line = True

    def write(self, char: str) -> int:
        written = 0
        if self._new_line:
            written += self._sink.print(" " * (self._level * self._indent_size))
        written += self._sink.write(char)
        self._new_line = char == "\n"
        return written

    def println(self) -> int:
        return self.write("\r") + self.write("\n")

    def indent(self) -> None:
        self._level += 1

    def unindent(self) -> None:
        if self._level > 0:
            self._level -= 1


class Prettyfier(Print):
    """Turns a compact JSON character stream into an indented one."""

    def __init__(self, sink: Print) -> None:
        self._sink = _IndentedPrint(sink)
        self._previous = ""
        self._in_string = False

    def write(self, char: str) -> int:
        if self._in_string:
            written = self._string_char(char)
        else:
            written = self._markup_char(char)
        self._previous = char
        return written

    def _in_empty_block(self) -> bool:
        return self._previous in ("{", "[")

    def _string_char(self, char: str) -> int:
        if char == '"' and self._previous != "\\":
            self._in_string = False
        return self._sink.write(char)

    def _markup_char(self, char: str) -> int:
        if char in "{[":
            return self._indent_if_needed() + self._sink.write(char)
        if char in "}]":
            return self._unindent_if_needed() + self._sink.write(char)
        if char == ":":
            return self._sink.write(":") + self._sink.write(" ")
        if char == ",":
            return self._sink.write(",") + self._sink.println()
        if char == '"':
            self._in_string = True
            return self._indent_if_needed() + self._sink.write('"')
        return self._indent_if_needed() + self._sink.write(char)

    def _indent_if_needed(self) -> int:
        if not self._in_empty_block():
            return 0
        self._sink.indent()
        return self._sink.println()

    def _unindent_if_needed(self) -> int:
        if self._in_empty_block():
            return 0
        self._sink.unindent()
        return self._sink.println()


class JsonWriter:
    """Writes JSON tokens to a sink and counts the characters stored."""

    def __init__(self, sink: Print) -> None:
        self._sink = sink
        self._length = 0

    def _write(self, text: str) -> None:
        self._length += self._sink.print(text)

    def bytes_written(self) -> int:
        return self._length

    def begin_array(self) -> None:
        self._write("[")

    def end_array(self) -> None:
        self._write("]")

    def begin_object(self) -> None:
        self._write("{")

    def end_object(self) -> None:
        self._write("}")

    def write_colon(self) -> None:
        self._write(":")

    def write_comma(self) -> None:
        self._write(",")

    def write_string(self, value: str | None) -> None:
        if value is None:
            self._write("null")
            return
        self._write('"' + "".join(_ESCAPES.get(char, char) for char in value) + '"')

    def write_raw(self, value: str | None) -> None:
        self._write("null" if value is None else value)

    def write_long(self, value: int) -> None:
        self._write(str(value))

    def write_boolean(self, value: bool) -> None:
        self._write("true" if value else "false")

    def write_double(self, value: float, decimals: int) -> None:
        self._write(format_double(value, decimals))