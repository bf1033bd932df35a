"""
json_value.py - In-memory value tree.

A Value starts out uncommitted and becomes a dictionary, a list or a
scalar the first time it is written through one of those shapes. After
that the shape is fixed until ``reset()``.

Indexing is the mutating path and auto-vivifies, the way a defaultdict
does: ``v["k"]`` inserts an empty child for a missing key and ``v[5]``
grows a list to six elements. ``get()`` and ``at()`` are the read-only
path and answer misses with the shared ``INVALID`` sentinel.
"""

import math
import re
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from json_escape import unescape

# Optional sign, digits with an optional fraction (or a bare fraction),
# optional exponent. Only a prefix has to match; the rest of the text is
# ignored, the way stream extraction stops at the first bad character.
# An exponent marker with no digits after it fails the parse, as strtod does.
_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)([eE][+-]?\d+)?)")

_MISSING = object()


class NotANumberError(ValueError):
    """Scalar text has no numeric prefix."""


class Kind(Enum):
    UNCOMMITTED = "uncommitted"
    DICT        = "dict"
    LIST        = "list"
    SCALAR      = "scalar"


Key = Union[str, int]


class Value:
    __slots__ = ("_kind", "_data")

    def __init__(self, text: Optional[str] = None):
        self._kind = Kind.UNCOMMITTED
        self._data = None
        if text is not None:
            self.text = text

    # -- shape ------------------------------------------------------------
    @property
    def kind(self) -> Kind:
        return self._kind

    @property
    def is_uncommitted(self) -> bool:
        return self._kind is Kind.UNCOMMITTED

    @property
    def is_dict(self) -> bool:
        return self._kind is Kind.DICT

    @property
    def is_list(self) -> bool:
        return self._kind is Kind.LIST

    @property
    def is_scalar(self) -> bool:
        return self._kind is Kind.SCALAR

    def _commit(self, kind: Kind) -> None:
        if self._kind is kind:
            return
        if self._kind is not Kind.UNCOMMITTED:
            raise TypeError(f"value is a {self._kind.value}, not a {kind.value}")
        self._kind = kind
        if kind is Kind.DICT:
            self._data = {}
        elif kind is Kind.LIST:
            self._data = []
        else:
            self._data = ""

    def set_dict(self) -> "Value":
        self._commit(Kind.DICT)
        return self

    def set_list(self) -> "Value":
        self._commit(Kind.LIST)
        return self

    def reset(self) -> None:
        """Drop all children and text and go back to uncommitted."""
        self._kind = Kind.UNCOMMITTED
        self._data = None

    # -- scalar -----------------------------------------------------------
    @property
    def text(self) -> str:
        """Scalar text; empty for anything that is not a scalar."""
        return self._data if self._kind is Kind.SCALAR else ""

    @text.setter
    def text(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"scalar text must be str, got {type(text).__name__}")
        self._commit(Kind.SCALAR)
        self._data = text

    def unescaped(self) -> str:
        """Text of a scalar read from a quoted string, quotes and escapes removed."""
        return unescape(self.text)

    def as_number(self, default=_MISSING) -> float:
        """
        Parse the leading number of the scalar text.

        Trailing characters after a valid prefix are ignored. Raises
        NotANumberError when there is no prefix or it overflows, unless
        ``default`` is given, in which case that is returned instead.
        """
        text = self.text
        m = _NUMBER_PREFIX.match(text)
        if m and (m.group(2) or text[m.end():m.end() + 1] not in ("e", "E")):
            number = float(m.group(1))
            if not math.isinf(number):
                return number
        if default is not _MISSING:
            return default
        raise NotANumberError(f"not a number: {self.text[:20]!r}")

    def set_number(self, number: float) -> None:
        self.text = format(number, "g")

    # -- read-only lookups -----------------------------------------------
    def get(self, key: str) -> "Value":
        if self._kind is Kind.DICT:
            return self._data.get(key, INVALID)
        return INVALID

    def at(self, index: int) -> "Value":
        if self._kind is Kind.LIST and 0 <= index < len(self._data):
            return self._data[index]
        return INVALID

    def __contains__(self, key: str) -> bool:
        return self._kind is Kind.DICT and key in self._data

    def keys(self) -> List[str]:
        return list(self._data) if self._kind is Kind.DICT else []

    def values(self) -> List["Value"]:
        if self._kind is Kind.DICT:
            return list(self._data.values())
        if self._kind is Kind.LIST:
            return list(self._data)
        return []

    def items(self) -> List[Tuple[str, "Value"]]:
        return list(self._data.items()) if self._kind is Kind.DICT else []

    def __len__(self) -> int:
        if self._kind in (Kind.DICT, Kind.LIST):
            return len(self._data)
        return 0

    def __iter__(self) -> Iterator:
        """Keys of a dictionary, elements of a list, nothing otherwise."""
        if self._kind in (Kind.DICT, Kind.LIST):
            return iter(list(self._data))
        return iter(())

    # -- mutating lookups -------------------------------------------------
    def _slot(self, key: Key) -> Tuple[Union[dict, list], Key]:
        if isinstance(key, str):
            self._commit(Kind.DICT)
            return self._data, key
        if isinstance(key, int) and not isinstance(key, bool):
            if key < 0:
                raise IndexError(f"negative list index {key}")
            self._commit(Kind.LIST)
            items = self._data
            while key >= len(items):
                items.append(Value())
            return items, key
        raise TypeError(f"value keys must be str or int, got {type(key).__name__}")

    def __getitem__(self, key: Key) -> "Value":
        container, key = self._slot(key)
        if isinstance(container, dict):
            child = container.get(key)
            if child is None:
                child = container[key] = Value()
            return child
        return container[key]

    def __setitem__(self, key: Key, value) -> None:
        """Store a copy of ``value``; the tree never shares a node with its caller."""
        self._attach(key, _adopt(value))

    def _attach(self, key: Key, child: "Value") -> None:
        container, key = self._slot(key)
        container[key] = child

    def _clone(self) -> "Value":
        copy = Value()
        copy._kind = self._kind
        if self._kind is Kind.DICT:
            copy._data = {k: v._clone() for k, v in self._data.items()}
        elif self._kind is Kind.LIST:
            copy._data = [v._clone() for v in self._data]
        else:
            copy._data = self._data
        return copy

    # -- comparison -------------------------------------------------------
    def __eq__(self, other):
        if not isinstance(other, Value):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        if self._kind is Kind.DICT:
            # Key order is part of a tree's identity.
            return list(self._data.items()) == list(other._data.items())
        return self._data == other._data

    __hash__ = None

    def __repr__(self):
        if self._kind is Kind.UNCOMMITTED:
            return "Value()"
        return f"Value({self._kind.value}: {self._data!r})"


class _InvalidValue(Value):
    """Read-only stand-in returned by get()/at() misses."""

    __slots__ = ()

    def _commit(self, kind):
        raise TypeError("the invalid sentinel cannot be modified")

    def reset(self):
        raise TypeError("the invalid sentinel cannot be modified")

    def __repr__(self):
        return "INVALID"


INVALID = _InvalidValue()


def _adopt(value) -> Value:
    """Turn an assigned object into a child the tree can own."""
    if isinstance(value, _InvalidValue):
        return Value()
    if isinstance(value, Value):
        return value._clone()
    if isinstance(value, str):
        return Value(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        child = Value()
        child.set_number(value)
        return child
    raise TypeError(f"cannot store {type(value).__name__} in a value tree")


__all__ = ["Kind", "Value", "INVALID", "NotANumberError"]
