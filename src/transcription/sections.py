"""
Structured section extraction from model output.

The formatting model is asked for `{"sections": [{"title", "content"}]}` but may
wrap the JSON in commentary or code fences, or return something else entirely.
`parse_sections` extracts the first JSON object it can decode and falls back to
a single section holding the raw text, so transcript content is never lost.
"""

import json
import logging
from typing import Iterator, Optional

from .models import Section


FALLBACK_SECTION_TITLE = "Full text (formatting failed)"


def _balanced_spans(text: str) -> Iterator[tuple[int, int]]:
    """
    Yield `(start, end)` for every brace-balanced span in one pass.

    Quotes only open strings inside a brace, so prose apostrophes and quotes
    before the JSON are ignored. Braces inside strings do not count.
    """
    open_braces: list[int] = []
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"' and open_braces:
            in_string = True
        elif ch == "{":
            open_braces.append(i)
        elif ch == "}" and open_braces:
            yield open_braces.pop(), i + 1


def extract_json_object(text: str) -> Optional[dict]:
    """
    Find the earliest-starting balanced `{...}` span in text that decodes as a JSON object.

    An opening brace that never closes does not hide an object after it.

    Args:
        text: Free-form model output

    Returns:
        Decoded dict, or None if no span decodes
    """
    for start, end in sorted(_balanced_spans(text)):
        try:
            data = json.loads(text[start:end])
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data
    return None


def _sections_from_payload(payload: dict) -> list[Section]:
    raw_sections = payload["sections"]
    if not isinstance(raw_sections, list) or not raw_sections:
        raise ValueError("'sections' must be a non-empty list")

    sections = []
    for item in raw_sections:
        if not isinstance(item, dict) or "content" not in item:
            raise ValueError(f"Invalid section entry: {item!r}")
        sections.append(
            Section(title=str(item.get("title", "")), content=str(item["content"]))
        )
    return sections


def parse_sections(raw_text: str) -> list[Section]:
    """
    Parse a formatting response into sections.

    Args:
        raw_text: Text returned by the generation model

    Returns:
        Sections in model order, or a single fallback section whose content is
        `raw_text` verbatim when no usable structure is found
    """
    logger = logging.getLogger("transcript_formatter")

    try:
        payload = extract_json_object(raw_text)
        if payload is None:
            raise ValueError("JSON not found in response")
        return _sections_from_payload(payload)
    except (KeyError, ValueError) as e:
        logger.warning(f"Could not extract sections from model output: {e}")
        return [Section(title=FALLBACK_SECTION_TITLE, content=raw_text)]
