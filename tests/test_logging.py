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

"""Tests for structured logging helpers and the events the library emits."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from io import StringIO

import pytest

from bytebuilder import builder, text
from bytebuilder.codec import decode_base64_url
from bytebuilder.logging import (
    StructuredLogger,
    _coerce_level,
    configure_logging,
    get_logger,
)


class _CaptureHandler(logging.Handler):
    def __init__(self) -> None:
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


@contextmanager
def _capture(
    name: str, level: int = logging.DEBUG
) -> Iterator[list[logging.LogRecord]]:
    target = logging.getLogger(name)
    handler = _CaptureHandler()
    previous = target.level
    target.addHandler(handler)
    target.setLevel(level)
    try:
        yield handler.records
    finally:
        target.removeHandler(handler)
        target.setLevel(previous)
        handler.close()


@pytest.fixture(autouse=True)
def reset_logging_state() -> Iterator[None]:
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    try:
        yield
    finally:
        for handler in root.handlers:
            if handler not in original_handlers:
                handler.close()
        root.handlers = original_handlers
        root.setLevel(original_level)


def test_structured_logger_emits_event_and_context() -> None:
    logger = get_logger("tests.logging").bind(component="unit-test")

    with _capture("tests.logging", logging.INFO) as records:
        logger.info("structured", event="tests.event", context={"attempt": 1})

    assert len(records) == 1
    record = records[0]
    assert record.event == "tests.event"
    assert record.context == {"component": "unit-test", "attempt": 1}
    assert record.getMessage() == "structured"


def test_structured_logger_folds_extra_into_context() -> None:
    logger = get_logger("tests.logging.extra")

    with _capture("tests.logging.extra", logging.INFO) as records:
        logger.info("none-extra", event="tests.none", extra=None)
        logger.info("with-extra", extra={"event": "tests.extra", "count": 2})

    assert [record.event for record in records] == ["tests.none", "tests.extra"]
    assert records[0].context == {}
    assert records[1].context == {"count": 2}


def test_structured_logger_requires_event() -> None:
    logger = get_logger("tests.logging.missing")

    with _capture("tests.logging.missing", logging.INFO), pytest.raises(TypeError):
        logger.info("missing-event", extra={"detail": True})


def test_structured_logger_rejects_non_mapping_context() -> None:
    logger = get_logger("tests.logging.context")

    with _capture("tests.logging.context", logging.INFO), pytest.raises(TypeError):
        logger.info("bad", event="tests.bad", context=["not", "a", "mapping"])


def test_get_logger_accepts_override() -> None:
    override = logging.getLogger("override")

    logger = get_logger("ignored", logger_override=override, context={"plain": True})

    assert isinstance(logger, StructuredLogger)
    assert logger.logger is override
    assert logger.extra == {"plain": True}


def test_materialize_emits_debug_event() -> None:
    value = builder.concat([builder.from_bytes(b"ab"), builder.from_string("c")])

    with _capture("bytebuilder.builder") as records:
        builder.to_bytes(value)

    assert [record.event for record in records] == ["bytes_builder.materialize"]
    assert records[0].context == {
        "component": "bytes_builder",
        "fragments": 2,
        "size": 3,
    }
    assert records[0].levelno == logging.DEBUG


def test_string_materialize_emits_debug_event() -> None:
    with _capture("bytebuilder.text.builder") as records:
        text.to_string(text.from_strings(["a", "bc"]))

    assert records[0].event == "string_builder.materialize"
    assert records[0].context["fragments"] == 2
    assert records[0].context["length"] == 3


def test_rejected_decode_emits_debug_event() -> None:
    with _capture("bytebuilder.codec") as records:
        decode_base64_url("!!")

    assert len(records) == 1
    assert records[0].event == "base64.decode_rejected"
    assert records[0].context["url_safe"] is True
    assert records[0].context["length"] == 2


def test_library_is_silent_above_debug() -> None:
    with _capture("bytebuilder.builder", logging.INFO) as records:
        builder.to_bytes(builder.from_bytes(b"quiet"))

    assert records == []


def test_configure_logging_respects_existing_handlers() -> None:
    root = logging.getLogger()
    root_handler = logging.NullHandler()
    root.handlers = [root_handler]

    configure_logging(level="DEBUG", json_mode=True)

    assert root.handlers == [root_handler]
    assert root.level == logging.DEBUG


def test_configure_logging_honors_env() -> None:
    configure_logging(
        force=True,
        env={"BYTEBUILDER_LOG_FORMAT": "json", "BYTEBUILDER_LOG_LEVEL": "warning"},
    )

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.handlers[0].formatter.__class__.__name__ == "_JsonFormatter"
    assert root.level == logging.WARNING


def test_configure_logging_defaults_to_text_formatter() -> None:
    configure_logging(force=True, env={})

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.handlers[0].formatter.__class__.__name__ != "_JsonFormatter"
    assert root.level == logging.INFO


def test_configure_logging_json_mode_emits_structured_output(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    stream = StringIO()
    monkeypatch.setattr(sys, "stderr", stream)

    configure_logging(level="DEBUG", json_mode=True, force=True)
    with _capture("bytebuilder.builder"):
        builder.to_bytes(builder.from_bytes(b"xyz"))

    logging.getLogger().handlers[0].flush()
    payload = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert payload["event"] == "bytes_builder.materialize"
    assert payload["context"] == {
        "component": "bytes_builder",
        "fragments": 1,
        "size": 3,
    }
    assert payload["logger"] == "bytebuilder.builder"
    assert payload["level"] == "DEBUG"


def test_coerce_level_accepts_names_and_ints() -> None:
    assert _coerce_level("error") == logging.ERROR
    assert _coerce_level(logging.DEBUG) == logging.DEBUG
    with pytest.raises(TypeError, match="Unknown log level"):
        _coerce_level("loud")
