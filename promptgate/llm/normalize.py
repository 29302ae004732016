"""
Response-shape normalization for hosted inference backends.

The response schema differs between models: some return a list of objects,
some a single object, some a bare string. ``classify`` tags the payload with
its shape and ``extract_text`` walks a fixed field priority to pull the
generated text out of it.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

# Tried in order on object payloads
TEXT_FIELDS: Tuple[str, ...] = ("generated_text", "text", "summary")


class ShapeKind(str, Enum):
    ARRAY = "array"
    OBJECT = "object"
    STRING = "string"
    OTHER = "other"


@dataclass(frozen=True)
class ResponseShape:
    """A payload tagged with its shape."""
    kind: ShapeKind
    value: Any


def classify(payload: Any) -> ResponseShape:
    """Tag a decoded JSON payload with its shape. Empty lists are OTHER."""
    if isinstance(payload, list):
        if payload:
            return ResponseShape(ShapeKind.ARRAY, payload[0])
        return ResponseShape(ShapeKind.OTHER, payload)
    if isinstance(payload, dict):
        return ResponseShape(ShapeKind.OBJECT, payload)
    if isinstance(payload, str):
        return ResponseShape(ShapeKind.STRING, payload)
    return ResponseShape(ShapeKind.OTHER, payload)


def _serialize(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def text_from_object(obj: dict) -> Optional[str]:
    """First non-empty text field of an object, or None."""
    for field in TEXT_FIELDS:
        value = obj.get(field)
        if isinstance(value, str) and value:
            return value
    return None


def extract_text(payload: Any) -> str:
    """
    Extract generated text from any observed response shape.

    Args:
        payload: Decoded JSON body from the backend

    Returns:
        The generated text, or the JSON serialization of the value when no
        known text field is present
    """
    shape = classify(payload)

    if shape.kind == ShapeKind.ARRAY:
        return extract_text(shape.value)

    if shape.kind == ShapeKind.OBJECT:
        text = text_from_object(shape.value)
        return text if text is not None else _serialize(shape.value)

    if shape.kind == ShapeKind.STRING:
        return shape.value

    return _serialize(shape.value)


def strip_prompt_echo(text: str, prompt: str) -> str:
    """
    Remove an echoed prompt prefix and surrounding whitespace.

    Falls back to the unstripped text when nothing would remain.
    """
    cleaned = text
    if prompt and cleaned.startswith(prompt):
        cleaned = cleaned[len(prompt):]
    cleaned = cleaned.strip()
    return cleaned or text


def normalize_generation(payload: Any, prompt: str) -> str:
    """Extract text from a payload and strip the echoed prompt."""
    return strip_prompt_echo(extract_text(payload), prompt)
