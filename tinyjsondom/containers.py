"""JSON arrays and objects whose nodes are allocated from a JSON buffer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from .variant import JsonVariant
from .writer import DummyPrint, DynamicStringBuilder, JsonWriter, Print, Prettyfier


@dataclass
class JsonPair:
    """A key and its value inside a JsonObject."""

    key: str
    value: JsonVariant = field(default_factory=JsonVariant)


def _to_variant(value: Any, decimals: int) -> JsonVariant:
    if isinstance(value, JsonVariant):
        return JsonVariant(value)
    return JsonVariant(value, decimals)


def _allocate(buffer: Any, size: int) -> bool:
    if buffer is None:
        return False
    return buffer.alloc(size) is not None


def _print_with(write_to: Callable[[JsonWriter], None], sink: Print) -> int:
    writer = JsonWriter(sink)
    write_to(writer)
    return writer.bytes_written()


def _collect(printer: Callable[[Print], int]) -> str:
    sink = DynamicStringBuilder()
    printer(sink)
    return str(sink)


class JsonArray:
    """An ordered list of JSON values."""

    HEADER_SIZE = 16
    NODE_SIZE = 24
    _invalid_instance: JsonArray | None = None

    def __init__(self, buffer: Any) -> None:
        self._buffer = buffer
        self._nodes: list[JsonVariant] = []

    @classmethod
    def invalid(cls) -> JsonArray:
        """The shared instance that is returned when allocation or parsing fails."""
        if cls._invalid_instance is None:
            cls._invalid_instance = cls(None)
        return cls._invalid_instance

    def success(self) -> bool:
        """False for the invalid instance, which stands for a failed allocation or parse."""
        return self._buffer is not None

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[JsonVariant]:
        return iter(list(self._nodes))

    def _valid_index(self, index: int) -> bool:
        return 0 <= index < len(self._nodes)

    def __getitem__(self, index: int) -> JsonArraySubscript:
        return JsonArraySubscript(self, index)

    def __setitem__(self, index: int, value: Any) -> None:
        self.set(index, value)

    def get(self, index: int) -> JsonVariant:
        """The value at ``index``, or an undefined variant if there is none."""
        if self._valid_index(index):
            return self._nodes[index]
        return JsonVariant()

    def set(self, index: int, value: Any, decimals: int = 2) -> bool:
        """Replace the value at an existing index; False if the index does not exist."""
        if not self._valid_index(index):
            return False
        self._nodes[index] = _to_variant(value, decimals)
        return True

    def add(self, value: Any, decimals: int = 2) -> bool:
        """Append a value; False if the buffer has no room for it."""
        if not _allocate(self._buffer, self.NODE_SIZE):
            return False
        self._nodes.append(_to_variant(value, decimals))
        return True

    def remove_at(self, index: int) -> None:
        if self._valid_index(index):
            del self._nodes[index]

    def create_nested_array(self) -> JsonArray:
        if self._buffer is None:
            return JsonArray.invalid()
        array = self._buffer.create_array()
        self.add(array)
        return array

    def create_nested_object(self) -> JsonObject:
        if self._buffer is None:
            return JsonObject.invalid()
        obj = self._buffer.create_object()
        self.add(obj)
        return obj

    def write_to(self, writer: JsonWriter) -> None:
        writer.begin_array()
        for position, value in enumerate(self._nodes):
            if position:
                writer.write_comma()
            value.write_to(writer)
        writer.end_array()

    def print_to(self, sink: Print) -> int:
        """Write compact JSON to ``sink`` and return the number of characters stored."""
        return _print_with(self.write_to, sink)

    def pretty_print_to(self, sink: Print) -> int:
        """Write indented JSON to ``sink`` and return the number of characters stored."""
        return _print_with(self.write_to, Prettyfier(sink))

    def to_json(self) -> str:
        return _collect(self.print_to)

    def to_pretty_json(self) -> str:
        return _collect(self.pretty_print_to)

    def measure_length(self) -> int:
        return self.print_to(DummyPrint())

    def measure_pretty_length(self) -> int:
        return self.pretty_print_to(DummyPrint())

    def __repr__(self) -> str:
        return f"JsonArray({self.to_json()})"


class JsonObject:
    """A list of key/value pairs with unique keys, kept in insertion order."""

    HEADER_SIZE = 16
    NODE_SIZE = 32
    _invalid_instance: JsonObject | None = None

    def __init__(self, buffer: Any) -> None:
        self._buffer = buffer
        self._nodes: list[JsonPair] = []

    @classmethod
    def invalid(cls) -> JsonObject:
        """The shared instance that is returned when allocation or parsing fails."""
        if cls._invalid_instance is None:
            cls._invalid_instance = cls(None)
        return cls._invalid_instance

    def success(self) -> bool:
        """False for the invalid instance, which stands for a failed allocation or parse."""
        return self._buffer is not None

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[JsonPair]:
        return iter(list(self._nodes))

    def _find(self, key: Any) -> JsonPair | None:
        return next((pair for pair in self._nodes if pair.key == key), None)

    def __getitem__(self, key: str) -> JsonObjectSubscript:
        return JsonObjectSubscript(self, key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def get(self, key: str) -> JsonVariant:
        """The value for ``key``, or an undefined variant if the key is absent."""
        pair = self._find(key)
        return pair.value if pair is not None else JsonVariant()

    def set(self, key: str, value: Any, decimals: int = 2) -> bool:
        """Set the value for ``key``; False if a new entry cannot be allocated."""
        pair = self._find(key)
        if pair is None:
            if not _allocate(self._buffer, self.NODE_SIZE):
                return False
            pair = JsonPair(key)
            self._nodes.append(pair)
        pair.value = _to_variant(value, decimals)
        return True

    def contains_key(self, key: str) -> bool:
        return self._find(key) is not None

    def remove(self, key: str) -> None:
        pair = self._find(key)
        if pair is not None:
            self._nodes.remove(pair)

    def create_nested_array(self, key: str) -> JsonArray:
        if self._buffer is None:
            return JsonArray.invalid()
        array = self._buffer.create_array()
        self.set(key, array)
        return array

    def create_nested_object(self, key: str) -> JsonObject:
        if self._buffer is None:
            return JsonObject.invalid()
        obj = self._buffer.create_object()
        self.set(key, obj)
        return obj

    def write_to(self, writer: JsonWriter) -> None:
        writer.begin_object()
        for position, pair in enumerate(self._nodes):
            if position:
                writer.write_comma()
            writer.write_string(pair.key)
            writer.write_colon()
            pair.value.write_to(writer)
        writer.end_object()

    def print_to(self, sink: Print) -> int:
        """Write compact JSON to ``sink`` and return the number of characters stored."""
        return _print_with(self.write_to, sink)

    def pretty_print_to(self, sink: Print) -> int:
        """Write indented JSON to ``sink`` and return the number of characters stored."""
        return _print_with(self.write_to, Prettyfier(sink))

    def to_json(self) -> str:
        return _collect(self.print_to)

    def to_pretty_json(self) -> str:
        return _collect(self.pretty_print_to)

    def measure_length(self) -> int:
        return self.print_to(DummyPrint())

    def measure_pretty_length(self) -> int:
        return self.pretty_print_to(DummyPrint())

    def __repr__(self) -> str:
        return f"JsonObject({self.to_json()})"


class _SubscriptReads:
    """Read access to a container slot, delegated to the variant it holds."""

    variant: Callable[[], JsonVariant]

    def as_long(self) -> int:
        return self.variant().as_long()

    def as_double(self) -> float:
        return self.variant().as_double()

    def as_bool(self) -> bool:
        return self.variant().as_bool()

    def as_string(self) -> str | None:
        return self.variant().as_string()

    def as_text(self) -> str:
        return self.variant().as_text()

    def as_array(self) -> JsonArray:
        return self.variant().as_array()

    def as_object(self) -> JsonObject:
        return self.variant().as_object()

    def is_long(self) -> bool:
        return self.variant().is_long()

    def is_double(self) -> bool:
        return self.variant().is_double()

    def is_bool(self) -> bool:
        return self.variant().is_bool()

    def is_string(self) -> bool:
        return self.variant().is_string()

    def is_array(self) -> bool:
        return self.variant().is_array()

    def is_object(self) -> bool:
        return self.variant().is_object()

    def __len__(self) -> int:
        return len(self.variant())

    def __getitem__(self, key: int | str) -> Any:
        return self.variant()[key]

    def print_to(self, sink: Print) -> int:
        return _print_with(self.variant().write_to, sink)

    def to_json(self) -> str:
        return _collect(self.print_to)

    def measure_length(self) -> int:
        return self.print_to(DummyPrint())


class JsonArraySubscript(_SubscriptReads):
    """A slot of a JsonArray, addressed by index."""

    def __init__(self, array: JsonArray, index: int) -> None:
        self._array = array
        self._index = index

    def success(self) -> bool:
        return 0 <= self._index < len(self._array)

    def variant(self) -> JsonVariant:
        return self._array.get(self._index)

    def set(self, value: Any, decimals: int = 2) -> bool:
        return self._array.set(self._index, value, decimals)

    def write_to(self, writer: JsonWriter) -> None:
        self.variant().write_to(writer)


class JsonObjectSubscript(_SubscriptReads):
    """A slot of a JsonObject, addressed by key."""

    def __init__(self, obj: JsonObject, key: str) -> None:
        self._object = obj
        self._key = key

    def success(self) -> bool:
        return self._object.contains_key(self._key)

    def variant(self) -> JsonVariant:
        return self._object.get(self._key)

    def set(self, value: Any, decimals: int = 2) -> bool:
        return self._object.set(self._key, value, decimals)

    def write_to(self, writer: JsonWriter) -> None:
        self.variant().write_to(writer)