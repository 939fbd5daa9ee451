"""Buffers that account for the memory used by JSON arrays and objects."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from .containers import JsonArray, JsonObject
from .parser import DEFAULT_NESTING_LIMIT, JsonParser

DEFAULT_LIMIT = DEFAULT_NESTING_LIMIT
_POINTER_SIZE = 8


def _round_size_up(size: int) -> int:
    mask = _POINTER_SIZE - 1
    return (size + mask) & ~mask


def array_size(count: int) -> int:
    """Bytes needed for an array holding ``count`` values."""
    return JsonArray.HEADER_SIZE + count * JsonArray.NODE_SIZE


def object_size(count: int) -> int:
    """Bytes needed for an object holding ``count`` key/value pairs."""
    return JsonObject.HEADER_SIZE + count * JsonObject.NODE_SIZE


class JsonBuffer(ABC):
    """Allocates containers and parses JSON text into them."""

    @abstractmethod
    def alloc(self, size: int) -> int | None:
        """Reserve ``size`` bytes; return their address, or None when out of memory."""

    def create_array(self) -> JsonArray:
        """A new empty array, or the invalid array if allocation fails."""
        if self.alloc(JsonArray.HEADER_SIZE) is None:
            return JsonArray.invalid()
        return JsonArray(self)

    def create_object(self) -> JsonObject:
        """A new empty object, or the invalid object if allocation fails."""
        if self.alloc(JsonObject.HEADER_SIZE) is None:
            return JsonObject.invalid()
        return JsonObject(self)

    def parse_array(self, json: str | None, nesting_limit: int = DEFAULT_LIMIT) -> JsonArray:
        """Parse ``json`` as an array; the invalid array on failure."""
        return JsonParser(self, json, nesting_limit).parse_array()

    def parse_object(
        self, json: str | None, nesting_limit: int = DEFAULT_LIMIT
    ) -> JsonObject:
        """Parse ``json`` as an object; the invalid object on failure."""
        return JsonParser(self, json, nesting_limit).parse_object()


class DefaultAllocator:
    """Hands out zeroed byte blocks from the heap."""

    def allocate(self, size: int) -> bytearray | None:
        return bytearray(size)

    def deallocate(self, block: bytearray | None) -> None:
        if block is not None:
            del block[:]


@dataclass
class _Block:
    memory: bytearray
    capacity: int
    address: int
    size: int = 0


class BlockJsonBuffer(JsonBuffer):
    """A buffer that grows by chaining blocks, each twice as large as the last."""

    FIRST_BLOCK_CAPACITY = 32

    def __init__(self, allocator=None) -> None:
        self._allocator = allocator if allocator is not None else DefaultAllocator()
        self._blocks: list[_Block] = []
        self._next_address = _POINTER_SIZE

    def size(self) -> int:
        """Total bytes handed out so far."""
        return sum(block.size for block in self._blocks)

    def alloc(self, size: int) -> int | None:
        head = self._blocks[-1] if self._blocks else None
        if head is None or head.size + size > head.capacity:
            head = self._add_block(size, head)
            if head is None:
                return None
        address = head.address + head.size
        head.size += _round_size_up(size)
        return address

    def _add_block(self, size: int, head: _Block | None) -> _Block | None:
        capacity = self.FIRST_BLOCK_CAPACITY if head is None else head.capacity * 2
        capacity = max(capacity, size)
        memory = self._allocator.allocate(capacity)
        if memory is None:
            return None
        block = _Block(memory, capacity, self._next_address)
        self._next_address += _round_size_up(capacity)
        self._blocks.append(block)
        return block

    def _release(self) -> None:
        for block in reversed(self._blocks):
            self._allocator.deallocate(block.memory)
        self._blocks.clear()

    def __enter__(self) -> BlockJsonBuffer:
        return self

    def __exit__(self, *exc_info) -> None:
        self._release()


class DynamicJsonBuffer(BlockJsonBuffer):
    """A block buffer backed by the default heap allocator."""

    def __init__(self) -> None:
        super().__init__(DefaultAllocator())