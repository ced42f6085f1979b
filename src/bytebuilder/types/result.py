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

"""Result values for operations that can fail without raising."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, NoReturn


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success case of :data:`Result`.

    Usage::

        match decode_base64("AAAA"):
            case Ok(value=data):
                print(data)
            case Err(error=error):
                print(error.reason)
    """

    value: T

    def is_ok(self) -> Literal[True]:
        return True

    def unwrap(self) -> T:
        """Return the wrapped value."""

        return self.value

    def unwrap_or[D](self, default: D) -> T | D:
        _ = default
        return self.value


@dataclass(frozen=True, slots=True)
class Err[E: BaseException]:
    """Failure case of :data:`Result`.

    The payload is an exception instance so the caller can choose to raise it
    with :meth:`unwrap` instead of inspecting it.
    """

    error: E

    def is_ok(self) -> Literal[False]:
        return False

    def unwrap(self) -> NoReturn:
        """Raise the wrapped error."""

        raise self.error

    def unwrap_or[D](self, default: D) -> D:
        return default


type Result[T, E: BaseException] = Ok[T] | Err[E]


__all__ = [
    "Err",
    "Ok",
    "Result",
]
