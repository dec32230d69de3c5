"""
Data model for parsed chatlogs.

A chatlog is an ordered list of blocks. Each block is either a ``Timestamp``
(a freeform caption line) or a ``Post`` (one or more lines from one speaker).
Users are open records of string fields so templates can reference whatever
columns the config defines (color, avatar, ...).
"""

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, Union


class User(Mapping):
    """
    Immutable mapping of field name to string value.

    ``name`` and ``key`` are always present on synthetic users; every other
    field is optional.
    """

    def __init__(self, fields: Mapping):
        self._fields = MappingProxyType({str(k): str(v) for k, v in fields.items()})

    @classmethod
    def synthetic(cls, token: str) -> "User":
        """Build the fallback user for a speaker missing from the config."""
        return cls({"name": token, "key": token})

    def __getitem__(self, key: str) -> str:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, User):
            return dict(self._fields) == dict(other._fields)
        if isinstance(other, Mapping):
            return dict(self._fields) == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._fields.items()))

    def __repr__(self) -> str:
        return f"User({dict(self._fields)!r})"

    def to_dict(self) -> Dict[str, str]:
        """Plain dict copy, used when handing the user to a template."""
        return dict(self._fields)


@dataclass(frozen=True)
class Timestamp:
    """A freeform timestamp line (``@ Today at 4:20 PM``)."""
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "timestamp", "message": self.message}


@dataclass(frozen=True)
class Post:
    """Consecutive lines from one speaker; every line ends with a newline."""
    user: User
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "post", "user": self.user.to_dict(), "message": self.message}


ChatlogBlock = Union[Timestamp, Post]
