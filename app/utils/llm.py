"""Extract the structured object from an LLM response."""

import json
from typing import Any, Iterable, Iterator, Optional

_decoder = json.JSONDecoder()


def _embedded_objects(text: str) -> Iterator[dict]:
    """Yield every JSON object that starts at a '{' in `text`, in order."""
    start = text.find("{")
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            value = None
        if isinstance(value, dict):
            yield value
        start = text.find("{", start + 1)


def _fenced_blocks(text: str) -> Iterator[str]:
    for block in text.split("```")[1::2]:
        block = block.strip()
        if block.startswith("json"):
            block = block[4:].strip()
        if block:
            yield block


def parse_json_response(text: str, required_keys: Optional[Iterable[str]] = None) -> Any:
    """Extract and parse JSON from an LLM response that may contain extra text.

    Tries, in order: the whole text, each ```json fenced block, then every
    object embedded in the prose. When `required_keys` is given, embedded
    objects lacking any of them are skipped, so a stray `{...}` in an
    explanation is not mistaken for the answer.

    Raises ValueError if no suitable JSON can be found.
    """
    stripped = text.strip()
    required = set(required_keys or ())

    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        pass

    for block in _fenced_blocks(stripped):
        try:
            return json.loads(block)
        except json.JSONDecodeError:
            continue

    for candidate in _embedded_objects(stripped):
        if required <= candidate.keys():
            return candidate

    raise ValueError(f"Could not parse JSON from LLM response: {stripped[:200]}")
