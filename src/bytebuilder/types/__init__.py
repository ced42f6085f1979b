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

"""Common type definitions shared across bytebuilder.

:data:`BytesLike`
    Raw buffers accepted wherever a byte fragment is expected::

        type BytesLike = bytes | bytearray | memoryview

:data:`ContractResult`
    Return type for design-by-contract predicates. Can be:

    - ``bool``: Simple pass/fail
    - ``tuple[bool, *tuple[object, ...]]``: Pass/fail with diagnostic message(s)
    - ``None``: Treated as failing

:class:`Ok` / :class:`Err` / :data:`Result`
    Value-level success and failure used by the base64 decoders::

        type Result[T, E: BaseException] = Ok[T] | Err[E]
"""

from __future__ import annotations

from .result import Err, Ok, Result

type BytesLike = bytes | bytearray | memoryview

type ContractResult = bool | tuple[bool, *tuple[object, ...]] | None

__all__ = [
    "BytesLike",
    "ContractResult",
    "Err",
    "Ok",
    "Result",
]
