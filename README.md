# tinyjsondom

A small JSON document model for Python. Arrays and objects are created from
a buffer that accounts for every allocation, the way a fixed-size memory pool
would. The parser is lenient: it accepts double-quoted, single-quoted and
unquoted strings, skips `/* ... */` and `// ...` comments, and enforces a
nesting limit.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Building a document

```python
from tinyjsondom.buffer import DynamicJsonBuffer

buffer = DynamicJsonBuffer()
root = buffer.create_object()
root["sensor"] = "gps"
root["time"] = 1351824120

data = root.create_nested_array("data")
data.add(48.756080, 6)
data.add(2.302038, 6)

print(root.to_json())
# {"sensor":"gps","time":1351824120,"data":[48.756080,2.302038]}

print(root.to_pretty_json())
```

Floating-point values are written with a fixed number of decimals, two by
default; values whose magnitude exceeds 4294967040 are written in scientific
notation (`1e+100`). Pass `decimals` to `add` or `set`, or wrap the value with
`double_with_n_digits` or `float_with_n_digits` from `tinyjsondom.variant`.

`JsonObject` keeps keys unique and in insertion order; setting an existing
key replaces its value. `JsonArray.set` only replaces existing positions,
`add` appends. Both containers offer `remove`/`remove_at`, `len()`,
iteration (values for arrays, `JsonPair` key/value pairs for objects),
`print_to`, `pretty_print_to`, `measure_length` and `measure_pretty_length`.

Indexing a container (`obj["key"]`, `array[0]`) returns a subscript
(`JsonObjectSubscript`, `JsonArraySubscript`) whose `success()` tells whether
the slot exists, whose `set()` stores a value, and which reads through to the
held value with the same `as_*` and `is_*` methods as `JsonVariant`;
`variant()` returns the value itself.

## Parsing

```python
from tinyjsondom.buffer import DynamicJsonBuffer

buffer = DynamicJsonBuffer()
obj = buffer.parse_object('{"name": "demo", "values": [1, 2, 3]}')

if obj.success():
    print(obj["name"].as_string())        # demo
    print(len(obj["values"].as_array()))  # 3
```

A failed parse, or running out of buffer memory, returns the shared invalid
array or object (`JsonArray.invalid()`, `JsonObject.invalid()`), whose
`success()` is `False`. `parse_array` and `parse_object` take an optional
`nesting_limit` (10 by default); with 0 only flat containers are accepted.
Parsing stops at the first NUL character. Unquoted and numeric values are
kept as raw text and typed when read: `is_long()` and `is_double()` inspect
the text, and `null` reads back as `None` from `as_string()`.

The escapes `\b \f \n \r \t` are decoded; any other escaped character stands
for itself, so `\uXXXX` sequences are not decoded.

## Values

`JsonVariant` holds a boolean, an integer, a double with a number of
decimals, a string, `None`, raw text (`Unparsed`), or a reference to an array
or object. It converts between those types on request (`as_long`,
`as_double`, `as_bool`, `as_string`, `as_text`, `as_array`, `as_object`) and
reports what it holds (`is_long`, `is_double`, `is_bool`, `is_string`,
`is_array`, `is_object`). Scalars are copied by value, containers by
reference. `to_json()` renders it; an undefined variant renders as an empty
string.

## Output sinks

`tinyjsondom.writer` provides the sinks used for output: `StaticStringBuilder`
(holds at most `size - 1` characters and drops the rest),
`DynamicStringBuilder` (unbounded), `DummyPrint` (only counts characters) and
`Prettyfier` (indents compact JSON on the fly, two spaces per level, lines
ending in `\r\n`). `JsonWriter` writes JSON tokens to any `Print` sink and
counts the characters actually stored.

```python
from tinyjsondom.writer import StaticStringBuilder

sink = StaticStringBuilder(8)
root.print_to(sink)
print(str(sink))   # first 7 characters only
```

## Memory accounting

`DynamicJsonBuffer.size()` reports the bytes handed out so far. Blocks grow
from 32 bytes, each new block twice the previous one, and allocations are
rounded up to multiples of 8. `array_size(n)` and `object_size(n)` give the
bytes an array or object with `n` elements takes.

`BlockJsonBuffer` accepts any allocator with `allocate(size)` and
`deallocate(block)`; an `allocate` that returns `None` makes every further
creation fail. Buffers are context managers that release their blocks on
exit.

There is no ready-made fixed-capacity buffer. To get one, subclass
`JsonBuffer` and implement `alloc`:

```python
from tinyjsondom.buffer import JsonBuffer, object_size

class BoundedBuffer(JsonBuffer):
    def __init__(self, capacity):
        self.capacity = capacity
        self.used = 0

    def alloc(self, size):
        if self.used + size > self.capacity:
            return None
        address = self.used
        self.used += size
        return address

buffer = BoundedBuffer(object_size(1))
obj = buffer.create_object()
obj["hello"] = 1
obj["world"] = 2   # no room: ignored
print(obj.to_json())  # {"hello":1}
```

## What it does not do

This is a library only: it has no command-line tool, and it does not read or
write files or streams itself. Parsing works on a `str`; output goes to the
sinks above or to a string via `to_json`/`to_pretty_json`.