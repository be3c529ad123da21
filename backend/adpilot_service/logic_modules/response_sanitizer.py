from __future__ import annotations

from typing import Iterator

JSON_FENCE = "```json"
BARE_FENCE = "```"


def strip_code_fences(text: str) -> str:
    """Delete markdown fence markers outright; no whitespace is left in their place."""

    return text.replace(JSON_FENCE, "").replace(BARE_FENCE, "")


def extract_json_span(text: str) -> str:
    """
    Isolate the outermost JSON object in a free-form model reply.

    Fences are stripped, then the slice from the first ``{`` to the last ``}`` (inclusive) is
    returned. When that slice does not exist the cleaned text is returned trimmed and the parse
    step is left to reject it. Never raises, and applying it twice gives the same result.
    """

    cleaned = strip_code_fences(text)
    first_brace = cleaned.find("{")
    last_brace = cleaned.rfind("}")
    if first_brace != -1 and last_brace != -1 and first_brace < last_brace:
        return cleaned[first_brace : last_brace + 1]
    return cleaned.strip()


def iter_balanced_objects(text: str) -> Iterator[str]:
    """
    Yield the top-level brace-balanced ``{...}`` blocks in ``text``, in order.

    Only a ``{`` met outside every other block opens a candidate, so nested objects are never
    yielded on their own. Braces inside JSON string literals (including escaped quotes) are
    ignored. Scanning stops at the first block that never closes: a truncated object yields
    nothing from that point on.
    """

    depth = 0
    start = -1
    in_string = False
    escaped = False
    for index, char in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == "{":
            if depth == 0:
                start = index
            depth += 1
        elif depth == 0:
            continue
        elif char == '"':
            in_string = True
        elif char == "}":
            depth -= 1
            if depth == 0:
                yield text[start : index + 1]


__all__ = [
    "extract_json_span",
    "iter_balanced_objects",
    "strip_code_fences",
]
