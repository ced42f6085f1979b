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

"""Base64 helpers with optional padding and a URL-safe alphabet.

Encoders return ``str`` and can drop the trailing ``=`` fill. Decoders accept
padded and unpadded input alike: missing fill is restored as
``(4 - len(text) % 4) % 4`` characters before strict decoding. Invalid input
produces an :class:`~bytebuilder.types.Err` carrying a
:class:`~bytebuilder.errors.Base64DecodeError`; decoders never raise for bad
input.

Example::

    from bytebuilder.codec import decode_base64, encode_base64

    token = encode_base64(b"\\x00\\x00\\x00")          # "AAAA"
    assert decode_base64(token).unwrap() == b"\\x00\\x00\\x00"
"""

from __future__ import annotations

import base64
import binascii

from .builder import BytesBuilder, BytesLeaf, BytesMany, TextLeaf, to_bytes
from .dbc import ensure
from .errors import Base64DecodeError
from .logging import StructuredLogger, get_logger
from .types import BytesLike, Err, Ok, Result

logger: StructuredLogger = get_logger(__name__, context={"component": "base64"})

_PAD = "="
_STANDARD_TO_URL = str.maketrans("+/", "-_")
_URL_TO_STANDARD = str.maketrans("-_", "+/")

type Base64Input = BytesLike | BytesBuilder


def _padding_respected(
    *args: object,
    result: str | None = None,
    exception: BaseException | None = None,
    **kwargs: object,
) -> bool:
    if exception is not None or result is None:
        return True
    padding = kwargs.get("padding", args[1] if len(args) > 1 else True)
    return bool(padding) or not result.endswith(_PAD)


def _url_alphabet(
    *args: object,
    result: str | None = None,
    exception: BaseException | None = None,
    **kwargs: object,
) -> bool:
    if exception is not None or result is None:
        return True
    return "+" not in result and "/" not in result


def _as_buffer(data: Base64Input) -> BytesLike:
    if isinstance(data, BytesLeaf | TextLeaf | BytesMany):
        return to_bytes(data)
    return data


@ensure(_padding_respected)
def encode_base64(data: Base64Input, padding: bool = True) -> str:
    """Encode ``data`` with the standard alphabet.

    ``data`` may be a raw buffer or a bytes builder, which is materialized
    first. With ``padding=False`` the trailing ``=`` characters are removed.
    """

    encoded = base64.b64encode(_as_buffer(data)).decode("ascii")
    return encoded if padding else encoded.rstrip(_PAD)


def decode_base64(text: str) -> Result[bytes, Base64DecodeError]:
    """Decode standard-alphabet ``text``, padded or not."""

    return _decode(text, url_safe=False)


@ensure(_padding_respected, _url_alphabet)
def encode_base64_url(data: Base64Input, padding: bool = True) -> str:
    """Encode ``data`` with the URL and filename safe alphabet (``-`` and ``_``)."""

    return encode_base64(data, padding).translate(_STANDARD_TO_URL)


def decode_base64_url(text: str) -> Result[bytes, Base64DecodeError]:
    """Decode URL-safe ``text``, padded or not."""

    return _decode(text, url_safe=True)


def _decode(text: str, *, url_safe: bool) -> Result[bytes, Base64DecodeError]:
    if not isinstance(text, str):
        raise TypeError(f"Expected str, got {type(text).__name__}.")

    if not text.isascii():
        return _reject(text, "input contains non-ASCII characters", url_safe=url_safe)

    normalized = text.translate(_URL_TO_STANDARD) if url_safe else text
    normalized += _PAD * ((4 - len(normalized) % 4) % 4)
    try:
        return Ok(base64.b64decode(normalized, validate=True))
    except binascii.Error as error:
        return _reject(text, str(error), url_safe=url_safe)


def _reject(
    text: str, reason: str, *, url_safe: bool
) -> Err[Base64DecodeError]:
    logger.debug(
        "Rejected base64 input.",
        event="base64.decode_rejected",
        context={"length": len(text), "url_safe": url_safe, "reason": reason},
    )
    return Err(Base64DecodeError(reason, input_length=len(text)))


__all__ = [
    "decode_base64",
    "decode_base64_url",
    "encode_base64",
    "encode_base64_url",
]
