"""
Value History Ledger — the record of every chained step.

SYSTEM INVARIANT:
    The ledger only grows. Entry i is exactly the result of the i-th
    intercepted access on its handle, and a position never changes
    once assigned.

Entry Kinds:
    CALL  — Result returned by a forwarded method call
    READ  — Value of a data member read through its accessor
    WRITE — Value assigned to a data member through its accessor
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, Optional


class _NoValue:
    """Marker for "no value": unset members and out-of-range lookups."""

    _instance: Optional[_NoValue] = None

    def __new__(cls) -> _NoValue:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_VALUE"

    def __reduce__(self):
        return (_NoValue, ())


NO_VALUE = _NoValue()


class EntryKind(Enum):
    """How an entry's value was produced."""
    CALL = "call"
    READ = "read"
    WRITE = "write"


@dataclass(frozen=True)
class LedgerEntry:
    """
    One recorded step.
    
    The value is kept by reference. Entries are never replaced, but a
    mutable value (a list returned by a call, say) is not copied.
    """
    position: int
    member: str
    kind: EntryKind
    value: Any


class Ledger:
    """
    Append-only, zero-indexed sequence of LedgerEntry objects.
    
    There is intentionally no removal, insertion, or reordering API.
    """

    def __init__(self) -> None:
        self._entries: list[LedgerEntry] = []

    def append(
        self,
        value: Any,
        member: str = "",
        kind: EntryKind = EntryKind.CALL,
    ) -> int:
        """Record a value and return its position."""
        position = len(self._entries)
        self._entries.append(
            LedgerEntry(position=position, member=member, kind=kind, value=value)
        )
        return position

    def entry(self, index: int) -> Optional[LedgerEntry]:
        """
        Get the full entry at a position, or None if nothing was recorded there.
        
        Raises:
            TypeError: If index is not an integer
        """
        index = operator.index(index)
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def at(self, index: int) -> Any:
        """Get the value at a position, or NO_VALUE if out of range."""
        found = self.entry(index)
        if found is None:
            return NO_VALUE
        return found.value

    def values(self) -> list[Any]:
        return [entry.value for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(tuple(self._entries))

    def __repr__(self) -> str:
        return f"Ledger(entries={len(self._entries)})"
