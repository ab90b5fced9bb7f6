"""
Shared base for the hand-written message stubs in this package.

Each message declares its fields once in FIELDS (name -> zero value) and
its nested message fields in MESSAGES (name -> message class). A nested
field whose zero value is a list is repeated; otherwise it is optional
and defaults to None.

Wire encoding is UTF-8 JSON, the same as the other stubs here. Replace with
real protoc output when proto toolchain is available.
"""

import copy
import json
from typing import Any, Dict, Optional, Type, TypeVar

M = TypeVar("M", bound="Message")


class Message:
    """Base class for hand-written proto message stubs."""

    FIELDS: Dict[str, Any] = {}
    MESSAGES: Dict[str, Type["Message"]] = {}

    def __init__(self, **kwargs: Any) -> None:
        unknown = set(kwargs) - set(self.FIELDS)
        if unknown:
            raise TypeError(
                f"{type(self).__name__} got unexpected fields: {', '.join(sorted(unknown))}"
            )
        for name, zero in self.FIELDS.items():
            value = kwargs.get(name)
            setattr(self, name, copy.copy(zero) if value is None else value)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self.FIELDS)
        return f"{type(self).__name__}({fields})"

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for name in self.FIELDS:
            value = getattr(self, name)
            if isinstance(value, Message):
                value = value.to_dict()
            elif isinstance(value, list):
                value = [v.to_dict() if isinstance(v, Message) else v for v in value]
            out[name] = value
        return out

    @classmethod
    def from_dict(cls: Type[M], data: Optional[Dict[str, Any]]) -> M:
        """Build a message from a decoded JSON object.

        Unknown keys are ignored and nulls become the field's zero value,
        which is how database rows are mapped onto messages.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} expects an object, got {type(data).__name__}")

        values: Dict[str, Any] = {}
        for name in cls.FIELDS:
            value = data.get(name)
            if value is None:
                continue
            nested = cls.MESSAGES.get(name)
            if nested is not None:
                if isinstance(value, list):
                    value = [nested.from_dict(item) for item in value]
                else:
                    value = nested.from_dict(value)
            values[name] = value
        return cls(**values)

    def SerializeToString(self) -> bytes:
        return json.dumps(self.to_dict()).encode("utf-8")

    @classmethod
    def FromString(cls: Type[M], data: bytes) -> M:
        if not data:
            return cls()
        return cls.from_dict(json.loads(data.decode("utf-8")))
