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

"""Text builder used for the text fragments of a bytes builder."""

from __future__ import annotations

from .builder import (
    TEXT_ENCODING,
    TEXT_ERRORS,
    StringBuilder,
    StringLeaf,
    StringMany,
    append,
    append_builder,
    byte_size,
    concat,
    from_string,
    from_strings,
    is_empty,
    is_equal,
    join,
    new,
    prepend,
    prepend_builder,
    to_bytes,
    to_string,
)

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
