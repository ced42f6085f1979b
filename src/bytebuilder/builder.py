# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Persistent bytes builder with constant-time composition.

A :data:`BytesBuilder` is an immutable tree with three variants:

- :class:`BytesLeaf` holds a raw buffer.
- :class:`TextLeaf` holds a :data:`~bytebuilder.text.StringBuilder` whose
  UTF-8 encoding is produced when the builder is materialized.
- :class:`BytesMany` holds ordered children and denotes their concatenation.
  ``BytesMany(())`` is the empty sequence.

Combinators wrap their operands in a new :class:`BytesMany` node and never
look inside them, so chaining any number of appends costs O(1) per call.
:func:`to_bytes` walks the tree once with an explicit work list, collects the
leaf buffers in order, and joins them into a single allocation.

Example::

    from bytebuilder import builder

    packet = builder.concat_bytes([b"\\x01", b"\\x02"])
    packet = builder.append_string(packet, "ok")
    packet = builder.prepend_bytes(packet, b"\\x00")
    assert builder.to_bytes(packet) == b"\\x00\\x01\\x02ok"

Builders may be shared freely between threads and reused as operands of any
number of later compositions. Nodes compare by identity; use :func:`is_equal`
to compare content.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import assert_never, cast

from . import text as text_builder
from ._traversal import iter_leaves
from .dbc import ensure
from .logging import StructuredLogger, get_logger
from .text import StringBuilder
from .types import BytesLike

logger: StructuredLogger = get_logger(__name__, context={"component": "bytes_builder"})


class _BytesBuilderOps:
    __slots__ = ()

    def __add__(self, other: BytesBuilder) -> BytesBuilder:
        return append(cast("BytesBuilder", self), other)

    def __bytes__(self) -> bytes:
        return to_bytes(cast("BytesBuilder", self))


@dataclass(frozen=True, slots=True, eq=False)
class BytesLeaf(_BytesBuilderOps):
    """A literal byte fragment.

    ``data`` is either ``bytes`` or a read-only, byte-formatted
    ``memoryview``; use :func:`from_bytes` to normalize other buffers.
    """

    data: bytes | memoryview


@dataclass(frozen=True, slots=True, eq=False)
class TextLeaf(_BytesBuilderOps):
    """A fragment encoded from text at materialization time."""

    text: StringBuilder


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class BytesMany(_BytesBuilderOps):
    """Concatenation of ``items`` in order."""

    items: tuple[BytesBuilder, ...]

    def __repr__(self) -> str:
        return f"BytesMany(<{len(self.items)} items>)"


type BytesBuilder = BytesLeaf | TextLeaf | BytesMany


_EMPTY = BytesMany(())


def _freeze(data: BytesLike) -> bytes | memoryview:
    """Return an immutable view of ``data``, copying only mutable buffers.

    A memoryview is shared only when it exposes a ``bytes`` object. A
    read-only view over a ``bytearray`` or ``mmap`` can still change underneath
    the builder, so it is snapshotted like any other mutable buffer.
    """

    if isinstance(data, bytes):
        return data
    if isinstance(data, memoryview):
        if isinstance(data.obj, bytes) and data.c_contiguous:
            return data.cast("B")
        return bytes(data)
    if isinstance(data, bytearray):
        return bytes(data)
    raise TypeError(
        f"Expected bytes, bytearray or memoryview, got {type(data).__name__}."
    )


def _children(node: BytesBuilder) -> tuple[BytesBuilder, ...] | None:
    match node:
        case BytesLeaf() | TextLeaf():
            return None
        case BytesMany(items=items):
            return items
        case _:
            raise TypeError(f"Expected a bytes builder, got {type(node).__name__}.")


# Constructors


def new() -> BytesBuilder:
    """Return the empty builder, the identity for :func:`append`."""

    return _EMPTY


empty = new


def from_bytes(data: BytesLike) -> BytesBuilder:
    """Wrap a raw buffer without copying it.

    ``bytes`` and read-only memoryviews are shared as-is. ``bytearray`` and
    writable memoryviews are snapshotted so later writes to the caller's
    buffer cannot change the builder.
    """

    return BytesLeaf(_freeze(data))


def from_string(value: str) -> BytesBuilder:
    return TextLeaf(text_builder.from_string(value))


def from_string_builder(value: StringBuilder) -> BytesBuilder:
    return TextLeaf(value)


def concat(builders: Iterable[BytesBuilder]) -> BytesBuilder:
    """Return one builder denoting ``builders`` joined in order.

    The items become the children of a single :class:`BytesMany` node.
    ``concat([])`` is the empty builder.
    """

    return BytesMany(tuple(builders))


def concat_bytes(chunks: Iterable[BytesLike]) -> BytesBuilder:
    """Return one builder denoting the raw ``chunks`` joined in order."""

    return BytesMany(tuple(from_bytes(chunk) for chunk in chunks))


# Combinators


def append(to: BytesBuilder, suffix: BytesBuilder) -> BytesBuilder:
    return BytesMany((to, suffix))


def prepend(to: BytesBuilder, prefix: BytesBuilder) -> BytesBuilder:
    return append(prefix, to)


def append_bytes(to: BytesBuilder, data: BytesLike) -> BytesBuilder:
    return append(to, from_bytes(data))


def prepend_bytes(to: BytesBuilder, data: BytesLike) -> BytesBuilder:
    return prepend(to, from_bytes(data))


def append_string(to: BytesBuilder, value: str) -> BytesBuilder:
    return append(to, from_string(value))


def prepend_string(to: BytesBuilder, value: str) -> BytesBuilder:
    return prepend(to, from_string(value))


def append_string_builder(to: BytesBuilder, value: StringBuilder) -> BytesBuilder:
    return append(to, from_string_builder(value))


def prepend_string_builder(to: BytesBuilder, value: StringBuilder) -> BytesBuilder:
    return prepend(to, from_string_builder(value))


# Terminal operations


def iter_fragments(builder: BytesBuilder) -> Iterator[bytes | memoryview]:
    """Yield each leaf's bytes in order, encoding text leaves as they appear."""

    for leaf in iter_leaves(builder, _children):
        match leaf:
            case BytesLeaf(data=data):
                yield data
            case TextLeaf(text=text):
                yield text_builder.to_bytes(text)
            case BytesMany():  # pragma: no cover - expanded by iter_leaves
                raise AssertionError("Composite node reported as a leaf.")
            case _ as unreachable:  # pragma: no cover - exhaustiveness sentinel
                assert_never(unreachable)  # pyright: ignore[reportUnreachable]


def _size_matches(
    builder: BytesBuilder,
    *,
    result: bytes | None = None,
    exception: BaseException | None = None,
) -> bool:
    if exception is not None or result is None:
        return True
    return len(result) == byte_size(builder)


@ensure(_size_matches)
def to_bytes(builder: BytesBuilder) -> bytes:
    """Materialize ``builder`` into one contiguous ``bytes`` object.

    Each text leaf is encoded once. When contracts are enabled the size
    postcondition re-measures the builder with :func:`byte_size`, which
    encodes non-ASCII text leaves a second time.
    """

    fragments = list(iter_fragments(builder))
    data = b"".join(fragments)
    logger.debug(
        "Materialized bytes builder.",
        event="bytes_builder.materialize",
        context={"fragments": len(fragments), "size": len(data)},
    )
    return data


def byte_size(builder: BytesBuilder) -> int:
    """Return ``len(to_bytes(builder))`` without joining the fragments."""

    total = 0
    for leaf in iter_leaves(builder, _children):
        match leaf:
            case BytesLeaf(data=data):
                total += len(data)
            case TextLeaf(text=text):
                total += text_builder.byte_size(text)
            case BytesMany():  # pragma: no cover - expanded by iter_leaves
                raise AssertionError("Composite node reported as a leaf.")
            case _ as unreachable:  # pragma: no cover - exhaustiveness sentinel
                assert_never(unreachable)  # pyright: ignore[reportUnreachable]
    return total


def is_empty(builder: BytesBuilder) -> bool:
    return not any(len(fragment) for fragment in iter_fragments(builder))


def is_equal(first: BytesBuilder, second: BytesBuilder) -> bool:
    """Compare the bytes denoted by two builders, ignoring tree shape."""

    return to_bytes(first) == to_bytes(second)


__all__ = [
    "BytesBuilder",
    "BytesLeaf",
    "BytesMany",
    "TextLeaf",
    "append",
    "append_bytes",
    "append_string",
    "append_string_builder",
    "byte_size",
    "concat",
    "concat_bytes",
    "empty",
    "from_bytes",
    "from_string",
    "from_string_builder",
    "is_empty",
    "is_equal",
    "iter_fragments",
    "new",
    "prepend",
    "prepend_bytes",
    "prepend_string",
    "prepend_string_builder",
    "to_bytes",
]
