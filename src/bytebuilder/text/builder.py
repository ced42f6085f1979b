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

"""Persistent text builder with constant-time composition.

A :data:`StringBuilder` is a small immutable tree. Leaves hold ``str``
fragments and :class:`StringMany` nodes hold ordered children, so appending,
prepending and concatenating never copy text. :func:`to_string` walks the
tree once, without recursion, and joins the fragments.

Nodes compare by identity. Use :func:`is_equal` to compare content.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import cast

from .._traversal import iter_leaves
from ..logging import StructuredLogger, get_logger

logger: StructuredLogger = get_logger(__name__, context={"component": "string_builder"})

TEXT_ENCODING = "utf-8"
# Lone surrogates encode as "?" so encoding is total over every ``str``.
TEXT_ERRORS = "replace"


class _StringBuilderOps:
    __slots__ = ()

    def __add__(self, other: StringBuilder) -> StringBuilder:
        return append_builder(cast("StringBuilder", self), other)

    def __str__(self) -> str:
        return to_string(cast("StringBuilder", self))


@dataclass(frozen=True, slots=True, eq=False)
class StringLeaf(_StringBuilderOps):
    """A literal text fragment."""

    text: str


@dataclass(frozen=True, slots=True, eq=False, repr=False)
class StringMany(_StringBuilderOps):
    """Concatenation of ``items`` in order. ``StringMany(())`` is empty."""

    items: tuple[StringBuilder, ...]

    def __repr__(self) -> str:
        return f"StringMany(<{len(self.items)} items>)"


type StringBuilder = StringLeaf | StringMany


_EMPTY = StringMany(())


def _children(node: StringBuilder) -> tuple[StringBuilder, ...] | None:
    match node:
        case StringLeaf():
            return None
        case StringMany(items=items):
            return items
        case _:
            raise TypeError(f"Expected a string builder, got {type(node).__name__}.")


def _fragments(builder: StringBuilder) -> Iterator[str]:
    for leaf in iter_leaves(builder, _children):
        yield cast(StringLeaf, leaf).text


def _encode(text: str) -> bytes:
    return text.encode(TEXT_ENCODING, TEXT_ERRORS)


def new() -> StringBuilder:
    """Return the empty builder."""

    return _EMPTY


def from_string(text: str) -> StringBuilder:
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}.")
    return StringLeaf(text)


def from_strings(texts: Iterable[str]) -> StringBuilder:
    """Return a builder joining ``texts`` in order with no separator."""

    return StringMany(tuple(from_string(text) for text in texts))


def append_builder(to: StringBuilder, suffix: StringBuilder) -> StringBuilder:
    return StringMany((to, suffix))


def prepend_builder(to: StringBuilder, prefix: StringBuilder) -> StringBuilder:
    return append_builder(prefix, to)


def append(to: StringBuilder, suffix: str) -> StringBuilder:
    return append_builder(to, from_string(suffix))


def prepend(to: StringBuilder, prefix: str) -> StringBuilder:
    return append_builder(from_string(prefix), to)


def concat(builders: Iterable[StringBuilder]) -> StringBuilder:
    """Return a single builder for ``builders`` in order.

    The sequence becomes the children of one :class:`StringMany` node; the
    builders themselves are shared, not copied.
    """

    return StringMany(tuple(builders))


def join(builders: Iterable[StringBuilder], separator: str) -> StringBuilder:
    """Concatenate ``builders`` with ``separator`` between neighbours."""

    glue = from_string(separator)
    items: list[StringBuilder] = []
    for index, builder in enumerate(builders):
        if index:
            items.append(glue)
        items.append(builder)
    return StringMany(tuple(items))


def to_string(builder: StringBuilder) -> str:
    """Materialize ``builder`` into one ``str``."""

    parts = list(_fragments(builder))
    text = "".join(parts)
    logger.debug(
        "Materialized string builder.",
        event="string_builder.materialize",
        context={"fragments": len(parts), "length": len(text)},
    )
    return text


def to_bytes(builder: StringBuilder) -> bytes:
    """Return the UTF-8 encoding of ``builder``'s content."""

    return _encode("".join(_fragments(builder)))


def byte_size(builder: StringBuilder) -> int:
    """Return ``len(to_bytes(builder))`` without building the joined string."""

    total = 0
    for text in _fragments(builder):
        total += len(text) if text.isascii() else len(_encode(text))
    return total


def is_empty(builder: StringBuilder) -> bool:
    return not any(_fragments(builder))


def is_equal(first: StringBuilder, second: StringBuilder) -> bool:
    """Compare content, ignoring how either builder was composed."""

    return "".join(_fragments(first)) == "".join(_fragments(second))


__all__ = [
    "TEXT_ENCODING",
    "TEXT_ERRORS",
    "StringBuilder",
    "StringLeaf",
    "StringMany",
    "append",
    "append_builder",
    "byte_size",
    "concat",
    "from_string",
    "from_strings",
    "is_empty",
    "is_equal",
    "join",
    "new",
    "prepend",
    "prepend_builder",
    "to_bytes",
    "to_string",
]
