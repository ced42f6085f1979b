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

"""Base exception hierarchy for :mod:`bytebuilder`."""

from __future__ import annotations


class BuilderError(Exception):
    """Base class for all bytebuilder exceptions.

    Builder composition and materialization are total over well-typed inputs,
    so the hierarchy is small. Catching :class:`BuilderError` covers every
    library-specific failure while letting standard Python exceptions (such as
    ``TypeError`` for a wrongly typed argument) propagate normally.

    Example:
        Catch any bytebuilder-specific error::

            try:
                payload = decode_base64(token).unwrap()
            except BuilderError as e:
                logger.warning("Rejected token: %s", e)
    """


class Base64DecodeError(BuilderError, ValueError):
    """Describes base64 input that could not be decoded.

    Decoders in :mod:`bytebuilder.codec` never raise this exception for bad
    input. They return it inside an :class:`~bytebuilder.types.Err` so the
    caller decides whether to retry, fall back, or propagate. It is raised
    only when the caller explicitly unwraps a failed result.

    Attributes:
        reason: Short human readable description of the failure.
        input_length: Length of the text as supplied by the caller, before
            padding normalization.

    Example:
        Handling a failed decode without exceptions::

            match decode_base64(text):
                case Ok(value=data):
                    consume(data)
                case Err(error=error):
                    logger.info("bad input (%d chars)", error.input_length)

    Note:
        This exception also inherits from ``ValueError`` so code written
        against :func:`base64.b64decode` keeps working after ``unwrap()``.
    """

    def __init__(self, reason: str, *, input_length: int) -> None:
        super().__init__(f"Invalid base64 input: {reason}")
        self.reason = reason
        self.input_length = input_length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Base64DecodeError):
            return NotImplemented
        return (self.reason, self.input_length) == (other.reason, other.input_length)

    def __hash__(self) -> int:
        return hash((type(self), self.reason, self.input_length))


__all__ = [
    "Base64DecodeError",
    "BuilderError",
]
