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

"""Compose byte strings from many fragments and materialize them once.

The top-level namespace re-exports the bytes builder API from
:mod:`bytebuilder.builder`. The text builder lives in :mod:`bytebuilder.text`
and the base64 helpers in :mod:`bytebuilder.codec`.
"""

from __future__ import annotations

from . import builder, codec, dbc, errors, text, types
from .builder import (
    BytesBuilder,
    BytesLeaf,
    BytesMany,
    TextLeaf,
    append,
    append_bytes,
    append_string,
    append_string_builder,
    byte_size,
    concat,
    concat_bytes,
    empty,
    from_bytes,
    from_string,
    from_string_builder,
    is_empty,
    is_equal,
    iter_fragments,
    new,
    prepend,
    prepend_bytes,
    prepend_string,
    prepend_string_builder,
    to_bytes,
)
from .codec import (
    decode_base64,
    decode_base64_url,
    encode_base64,
    encode_base64_url,
)
from .errors import Base64DecodeError, BuilderError
from .logging import configure_logging

__all__ = [
    "Base64DecodeError",
    "BuilderError",
    "BytesBuilder",
    "BytesLeaf",
    "BytesMany",
    "TextLeaf",
    "append",
    "append_bytes",
    "append_string",
    "append_string_builder",
    "builder",
    "byte_size",
    "codec",
    "concat",
    "concat_bytes",
    "configure_logging",
    "dbc",
    "decode_base64",
    "decode_base64_url",
    "empty",
    "encode_base64",
    "encode_base64_url",
    "errors",
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
    "text",
    "to_bytes",
    "types",
]
