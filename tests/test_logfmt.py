from __future__ import annotations

import logging

import pytest

from vecdb.utils.logfmt import LogfmtFormatter, format_context


def test_format_context_renders_supported_kinds() -> None:
    line = format_context({"id": 3, "ok": True, "score": 0.5, "path": "a b", "name": "duck"})

    assert line == 'id=3 name=duck ok=true path="a b" score=0.5'


def test_format_context_escapes_quotes_and_empty_strings() -> None:
    assert format_context({"q": 'say "hi"', "e": ""}) == 'e="" q="say \\"hi\\""'


def test_format_context_rejects_open_ended_values() -> None:
    with pytest.raises(TypeError):
        format_context({"items": [1, 2]})  # type: ignore[dict-item]
    with pytest.raises(TypeError):
        format_context({"missing": None})  # type: ignore[dict-item]


def test_empty_context_renders_nothing() -> None:
    assert format_context(None) == ""
    assert format_context({}) == ""


def test_formatter_appends_context() -> None:
    record = logging.LogRecord("vecdb", logging.INFO, __file__, 1, "Stored %s", ("text",), None)
    record.context = {"id": 1}

    assert LogfmtFormatter().format(record) == "info Stored text id=1"


def test_formatter_without_context() -> None:
    record = logging.LogRecord("vecdb", logging.WARNING, __file__, 1, "careful", (), None)

    assert LogfmtFormatter().format(record) == "warning careful"
