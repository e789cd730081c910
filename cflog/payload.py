"""
Payload classification.

Decides whether a value is shipped to Cloud Logging as a textPayload or a
jsonPayload:

- str is used as-is, bytes are decoded, None becomes an empty text payload.
- Anything else is serialized to JSON first.
- The resulting string is promoted to a jsonPayload when it starts with "{",
  ends with "}" and parses as a JSON object. Otherwise it stays text.

No whitespace is trimmed before the brace check, so " {\"a\": 1} " is text.
"""

import base64
import dataclasses
import json
from typing import Any, Dict, Union

from .errors import SerializationError


# ----------------- input variants -----------------

@dataclasses.dataclass(frozen=True)
class Text:
    value: str


@dataclasses.dataclass(frozen=True)
class Bytes:
    value: bytes


@dataclasses.dataclass(frozen=True)
class Document:
    """Any JSON-serializable value: mappings, lists, scalars, dataclasses."""
    value: Any


@dataclasses.dataclass(frozen=True)
class Absent:
    pass


Input = Union[Text, Bytes, Document, Absent]


def to_input(value: Any) -> Input:
    """Map an arbitrary runtime value onto one of the input variants."""
    if isinstance(value, (Text, Bytes, Document, Absent)):
        return value
    if value is None:
        return Absent()
    if isinstance(value, str):
        return Text(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return Bytes(bytes(value))
    return Document(value)


# ----------------- classified payloads -----------------

@dataclasses.dataclass(frozen=True)
class TextPayload:
    text: str

    def entry_fields(self) -> Dict[str, Any]:
        return {"text_payload": self.text}

    def text_form(self) -> str:
        return self.text


@dataclasses.dataclass(frozen=True)
class JsonPayload:
    document: Dict[str, Any]

    def entry_fields(self) -> Dict[str, Any]:
        return {"json_payload": self.document}

    def text_form(self) -> str:
        return json.dumps(self.document)


Payload = Union[TextPayload, JsonPayload]


def _json_default(obj: Any) -> Any:
    # nested bytes become base64 strings
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def serialize(value: Any) -> str:
    """Serialize a document to a JSON string, raising SerializationError."""
    try:
        return json.dumps(value, default=_json_default, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"could not serialize {type(value).__name__} payload: {e}") from e


def _looks_like_object(s: str) -> bool:
    return s.startswith("{") and s.endswith("}")


def classify(value: Any) -> Payload:
    """
    Classify a value as a text or JSON payload.

    Args:
        value: str, bytes, None, any JSON-serializable value, or one of the
            input variants (Text, Bytes, Document, Absent).

    Returns:
        TextPayload or JsonPayload.

    Raises:
        SerializationError: a document could not be serialized. Malformed
            JSON-looking strings never raise; they stay text.
    """
    item = to_input(value)

    if isinstance(item, Absent):
        return TextPayload("")
    if isinstance(item, Text):
        s = item.value
    elif isinstance(item, Bytes):
        s = item.value.decode("utf-8", errors="replace")
    else:
        s = serialize(item.value)

    if _looks_like_object(s):
        try:
            parsed = json.loads(s)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            return JsonPayload(parsed)

    return TextPayload(s)
