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

"""Tests for the design-by-contract decorators and the contracts in use."""

from __future__ import annotations

import pytest

import bytebuilder.dbc as dbc_module
from bytebuilder import builder, codec
from bytebuilder.dbc import (
    dbc_active,
    dbc_enabled,
    disable_dbc,
    enable_dbc,
    ensure,
)


def test_env_flag_controls_activation(monkeypatch: pytest.MonkeyPatch) -> None:
    dbc_module._forced_state = None

    monkeypatch.setenv("BYTEBUILDER_DBC", "off")
    assert not dbc_active()
    monkeypatch.setenv("BYTEBUILDER_DBC", "1")
    assert dbc_active()
    monkeypatch.delenv("BYTEBUILDER_DBC")
    assert not dbc_active()


def test_forced_state_overrides_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BYTEBUILDER_DBC", "1")

    disable_dbc()
    assert not dbc_active()
    enable_dbc()
    assert dbc_active()


def test_dbc_enabled_restores_previous_state() -> None:
    disable_dbc()

    with dbc_enabled():
        assert dbc_active()
    assert not dbc_active()

    enable_dbc()
    with dbc_enabled(active=False):
        assert not dbc_active()
    assert dbc_active()


def test_ensure_reports_detail_message() -> None:
    @ensure(lambda value, result: (result > value, "must grow"))
    def shrink(value: int) -> int:
        return value - 1

    with pytest.raises(AssertionError, match="Details: must grow"):
        shrink(3)


def test_ensure_sees_exceptions() -> None:
    seen: list[BaseException] = []

    def record(*args: object, **kwargs: object) -> bool:
        exception = kwargs.get("exception")
        if isinstance(exception, BaseException):
            seen.append(exception)
        return True

    @ensure(record)
    def explode() -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        explode()
    assert len(seen) == 1


def test_predicate_errors_become_assertions() -> None:
    @ensure(lambda result: 1 / 0)
    def constant() -> int:
        return 1

    with pytest.raises(AssertionError, match="raised ZeroDivisionError"):
        constant()


def test_decorators_require_predicates() -> None:
    with pytest.raises(ValueError, match="at least one predicate"):
        ensure()


def test_empty_tuple_result_is_rejected() -> None:
    @ensure(lambda result: ())
    def constant() -> int:
        return 1

    with pytest.raises(TypeError, match="empty tuples"):
        constant()


def test_to_bytes_contract_catches_size_mismatch(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(builder, "byte_size", lambda value: 0)

    with pytest.raises(AssertionError, match="to_bytes"):
        builder.to_bytes(builder.from_bytes(b"abc"))


def test_encoder_postconditions() -> None:
    assert codec._padding_respected(b"f", result="Zg==")
    assert codec._padding_respected(b"f", padding=False, result="Zg")
    assert not codec._padding_respected(b"f", False, result="Zg==")
    assert not codec._url_alphabet(b"", result="+/+/")
    assert codec._url_alphabet(b"", result="-_-_")
    assert codec._padding_respected(b"f", False, exception=TypeError("bad"))
    assert codec._url_alphabet("x", exception=TypeError("bad"))


def test_encoder_type_errors_pass_through_contracts() -> None:
    with pytest.raises(TypeError):
        codec.encode_base64("x")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        codec.encode_base64_url("x", padding=False)  # type: ignore[arg-type]


def test_to_bytes_type_errors_pass_through_contracts() -> None:
    foreign = builder.concat([builder.from_bytes(b"a"), b"raw"])  # type: ignore[list-item]

    with pytest.raises(TypeError, match="Expected a bytes builder, got bytes"):
        builder.to_bytes(foreign)
