# jsonwriter

A small JSON serializer with predictable output:

- floating-point numbers are written with the Grisu2 algorithm, giving short
  decimal forms that read back to the same value (`0.1` stays `0.1`, whole
  floats keep a trailing `.0`, and NaN or infinity become `null`);
- strings are checked as UTF-8, with a choice of raising, replacing bad
  sequences with U+FFFD, or dropping them;
- output may be compact or indented with any indent character;
- binary values carry an optional subtype and are written as
  `{"bytes":[...],"subtype":...}`.

It also has a 32-bit CRC over 32-bit little-endian words (polynomial
`0x04C11DB7`, no reflection, initial value `0xFFFFFFFF`, no final inversion).

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Using it

```python
from jsonwriter.serializer import dumps

dumps({"x": 0.1, "y": [1, 2, 3], "ok": True})
# '{"x":0.1,"y":[1,2,3],"ok":true}'  (keys in the mapping's own order)

print(dumps({"name": "go"}, indent=2))
# {
#   "name": "go"
# }
```

What `dumps` accepts:

- `None`, `bool`, `int` (signed or unsigned 64-bit range; others raise
  `ValueError`), `float` and `str`;
- mappings with string keys (other keys raise `TypeError`) as objects;
- lists and tuples as arrays;
- `ByteContainer`, `bytes` and `bytearray` as binary values (plain `bytes`
  and `bytearray` have a `null` subtype).

Any other type raises `TypeError`. A negative `indent` (the default) gives
compact output; zero or more pretty-prints with that many `indent_char` per
level. Pass `ensure_ascii=True` to escape every code point from U+007F on as
`\uXXXX`, and an `ErrorHandler` from `jsonwriter.escape` (or its value:
`"strict"`, `"replace"`, `"ignore"`) as `error_handler` to choose how invalid
UTF-8 is treated; the strict handler raises `JsonTypeError` with `id` 316.

To write into something other than a string, build a `Serializer` with a
target: a list (one element per character), any object with a `write`
method, or an `OutputAdapter` from `jsonwriter.output`:

```python
import io
from jsonwriter.serializer import Serializer

stream = io.StringIO()
Serializer(stream).dump([1, 2.5, "a"])
stream.getvalue()
# '[1,2.5,"a"]'
```

Binary data:

```python
from jsonwriter.binary import ByteContainer
from jsonwriter.serializer import dumps

dumps(ByteContainer(b"\x01\x02", 42))
# '{"bytes":[1,2],"subtype":42}'
```

`ByteContainer.subtype()` returns `2**64 - 1` when no subtype is set; use
`has_subtype()` to tell the cases apart.

## Lower-level pieces

- `jsonwriter.dtoa.to_chars(value, single=False)` formats a single float;
  with `single=True` the value is treated as IEEE single precision.
  `grisu2` returns the raw digits and decimal exponent.
- `jsonwriter.escape.escape_string` escapes a `str` or `bytes` value without
  the surrounding quotes; `decode` steps the UTF-8 validator one byte at a
  time.
- `jsonwriter.output` has `ListOutputAdapter`, `StreamOutputAdapter` and
  `StringOutputAdapter`, and `output_adapter(target)` to pick one.
- `jsonwriter.crc.crc32_core` checksums a sequence of 32-bit words and
  `crc32_bytes` a byte string whose length is a multiple of four.
- `jsonwriter.diyfp` holds the `DiyFp` arithmetic and cached powers of ten
  that Grisu2 is built on.

## What it does not do

The package only writes JSON. It has no parser, no JSON value type of its
own, and no command-line tool.