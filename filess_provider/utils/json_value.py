"""
Tagged JSON value used to walk untyped API response trees.

The filess.io API returns loosely typed payloads: ids arrive as strings or
numbers and nested objects may be absent or null. JsonValue wraps a decoded
JSON tree and exposes accessors that return None on a kind mismatch instead
of raising, so each extraction site decides how to handle the miss.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class JsonKind(Enum):
    """Kinds of JSON values"""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class JsonValue:
    """A decoded JSON value tagged with its kind."""

    kind: JsonKind
    raw: Any

    @classmethod
    def wrap(cls, raw: Any) -> "JsonValue":
        """
        Tag a decoded JSON tree.

        Args:
            raw: Output of json.loads (or an equivalent Python structure)

        Returns:
            JsonValue for the top-level node

        Raises:
            TypeError: If raw contains a non-JSON Python type
        """
        if isinstance(raw, JsonValue):
            return raw
        if raw is None:
            return cls(JsonKind.NULL, None)
        # bool before number: bool is an int subclass
        if isinstance(raw, bool):
            return cls(JsonKind.BOOL, raw)
        if isinstance(raw, (int, float)):
            return cls(JsonKind.NUMBER, raw)
        if isinstance(raw, str):
            return cls(JsonKind.STRING, raw)
        if isinstance(raw, (list, tuple)):
            return cls(JsonKind.ARRAY, list(raw))
        if isinstance(raw, dict):
            return cls(JsonKind.OBJECT, raw)
        raise TypeError(f"Unsupported JSON type: {type(raw).__name__}")

    @classmethod
    def parse(cls, text: Union[str, bytes]) -> "JsonValue":
        """Decode JSON text. Raises ValueError on malformed input."""
        return cls.wrap(json.loads(text))

    @classmethod
    def null(cls) -> "JsonValue":
        return cls(JsonKind.NULL, None)

    @property
    def is_null(self) -> bool:
        return self.kind is JsonKind.NULL

    def as_str(self) -> Optional[str]:
        return self.raw if self.kind is JsonKind.STRING else None

    def as_number(self) -> Optional[Union[int, float]]:
        return self.raw if self.kind is JsonKind.NUMBER else None

    def as_array(self) -> Optional[List["JsonValue"]]:
        if self.kind is not JsonKind.ARRAY:
            return None
        return [JsonValue.wrap(item) for item in self.raw]

    def as_object(self) -> Optional[Dict[str, "JsonValue"]]:
        if self.kind is not JsonKind.OBJECT:
            return None
        return {key: JsonValue.wrap(item) for key, item in self.raw.items()}

    def get(self, key: str) -> Optional["JsonValue"]:
        """
        Look up an object member.

        Returns None when this value is not an object or the key is absent.
        A member that is present but null is returned as a NULL JsonValue.
        """
        if self.kind is not JsonKind.OBJECT or key not in self.raw:
            return None
        return JsonValue.wrap(self.raw[key])

    def lookup(self, *keys: str) -> Optional["JsonValue"]:
        """Follow a path of object keys, returning None at the first miss."""
        current: Optional[JsonValue] = self
        for key in keys:
            if current is None:
                return None
            current = current.get(key)
        return current

    def get_str(self, key: str, default: str = "") -> str:
        """String member or default when absent or not a string."""
        value = self.get(key)
        if value is None:
            return default
        text = value.as_str()
        return default if text is None else text

    def dumps(self) -> str:
        return json.dumps(self.raw, separators=(",", ":"), sort_keys=True)
