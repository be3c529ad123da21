from __future__ import annotations

import pytest

from adpilot_service.logic_modules.response_sanitizer import (
    extract_json_span,
    iter_balanced_objects,
    strip_code_fences,
)


def test_fenced_reply_yields_bare_object():
    raw = '```json\n{"quickVerdict":"Scale now"}\n```'

    assert extract_json_span(raw) == '{"quickVerdict":"Scale now"}'


def test_prose_around_object_is_dropped():
    raw = 'Sure! Here is your forecast:\n{"a": {"b": 1}}\nLet me know if you need more.'

    assert extract_json_span(raw) == '{"a": {"b": 1}}'


def test_fences_are_deleted_without_whitespace():
    assert strip_code_fences('{"a":```1```}') == '{"a":1}'
    assert strip_code_fences("```json```") == ""


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  no json here  ", "no json here"),
        ("only an opening { brace ", "only an opening { brace"),
        ("} backwards {", "} backwards {"),
        ("```json\n```", ""),
        ("", ""),
    ],
)
def test_missing_span_returns_trimmed_text(raw, expected):
    assert extract_json_span(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        '```json\n{"quickVerdict":"Scale now"}\n```',
        "text { with } two { braces }",
        "  plain text  ",
        "``````json``` {} ``",
        "} reversed {",
    ],
)
def test_sanitizing_is_idempotent(raw):
    once = extract_json_span(raw)

    assert extract_json_span(once) == once


def test_balanced_scan_ignores_braces_in_strings():
    first = '{"title": "use } carefully", "n": {"x": "\\"}"}}'
    text = f'Intro {first} outro }} {{"b": 2}}'

    assert list(iter_balanced_objects(text)) == [first, '{"b": 2}']


def test_balanced_scan_never_yields_nested_blocks():
    assert list(iter_balanced_objects('{"a": {"b": 1}, "c": {"d": 2}}')) == ['{"a": {"b": 1}, "c": {"d": 2}}']


@pytest.mark.parametrize(
    "text",
    [
        '{"a": {"b": 1}',
        '{"a": 1',
        "no braces",
        'prose {"a": {"b": 1}, "c": {"d"',
    ],
)
def test_balanced_scan_yields_nothing_for_truncated_object(text):
    assert list(iter_balanced_objects(text)) == []
