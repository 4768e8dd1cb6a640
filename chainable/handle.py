"""
Interception Layer — the chain handle.

Every attribute read on a ChainHandle is intercepted, including names
that object itself defines (__eq__, __str__, __hash__, ...). Only the
two introspection accessors, the handle's slots, and the few names
Python needs on the instance (HANDLE_NAMES) are answered by the handle.
Everything else is answered in one of two ways:

    callable member — a forwarding function that calls the member,
                      records its result, and returns the handle
    data member     — a forwarding function that reads (no argument) or
                      writes (one argument) the member, records the value
                      read or assigned, and returns the handle

The handle never substitutes the operation's own return value, so any
API chains the same way. The true results live in the ledger and are
retrieved with get_chain_value_at().

Strict mode (see config.py) is checked before classification. It
rejects names that the original value's capability chain does not
declare, before anything is recorded.

Implicit protocol use (handle == x, str(handle), hash(handle)) goes
through the type, not through attribute reads, and is not intercepted.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Optional, TypeVar

from .config import ChainConfig, get_default_config
from .ledger import NO_VALUE, EntryKind, Ledger
from .normalize import box, read_member, unbox, write_member
from .resolver import chain_members, require_member

logger = logging.getLogger(__name__)

T = TypeVar("T")

RESERVED_NAMES = frozenset({"get_chain_reference", "get_chain_value_at"})

# isinstance() reads __class__; copy.deepcopy() reads __deepcopy__ on the instance
HANDLE_NAMES = frozenset({"__class__", "__copy__", "__deepcopy__"})

_SLOTS = ("_chain_surrogate", "_chain_ledger", "_chain_config")

_OWN_NAMES = RESERVED_NAMES | HANDLE_NAMES | frozenset(_SLOTS)


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


class ChainHandle(Generic[T]):
    """
    Fluent stand-in for a wrapped value.

    Exclusively bound to one surrogate (the source, or its boxed form),
    one Ledger and the ChainConfig that was in effect when it was created.
    """

    __slots__ = _SLOTS

    def __init__(self, source: T, config: Optional[ChainConfig] = None):
        if config is None:
            config = get_default_config()
        object.__setattr__(self, "_chain_surrogate", box(source))
        object.__setattr__(self, "_chain_ledger", Ledger())
        object.__setattr__(self, "_chain_config", config)

    # -------------------------------------------------------------------------
    # Introspection accessors (never recorded, never validated)
    # -------------------------------------------------------------------------

    def get_chain_reference(self) -> T:
        """Return the original value, unboxed."""
        return unbox(self._chain_surrogate)

    def get_chain_value_at(self, index: int) -> Any:
        """Return the result of the index-th step, or NO_VALUE."""
        return self._chain_ledger.at(index)

    # -------------------------------------------------------------------------
    # Interception
    # -------------------------------------------------------------------------

    def __getattribute__(self, name: str) -> Any:
        if name in _OWN_NAMES:
            return object.__getattribute__(self, name)
        _check_member(self, name)

        member = read_member(self._chain_surrogate, name)
        if callable(member):
            return _forward_call(self, name, member)
        return _forward_access(self, name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _SLOTS:
            object.__setattr__(self, name, value)
            return
        _check_member(self, name)
        _forward_access(self, name)(value)

    def __delattr__(self, name: str) -> None:
        raise AttributeError(
            f"cannot delete '{name}' through a chain handle; "
            f"use get_chain_reference() to reach the original"
        )

    # -------------------------------------------------------------------------
    # Python protocol
    # -------------------------------------------------------------------------

    def __copy__(self) -> ChainHandle[T]:
        """A new handle on the same source, with its own empty ledger."""
        return ChainHandle(self.get_chain_reference(), self._chain_config)

    def __deepcopy__(self, memo: dict) -> ChainHandle[T]:
        # The source is shared, never cloned
        return self.__copy__()

    def __dir__(self) -> list[str]:
        return sorted(chain_members(self.get_chain_reference()) | RESERVED_NAMES)

    def __repr__(self) -> str:
        return (
            f"ChainHandle[{type(self.get_chain_reference()).__qualname__}]"
            f"(steps={len(self._chain_ledger)}, strict={self._chain_config.strict})"
        )


# =============================================================================
# INTERCEPTION STEPS
# =============================================================================

def _check_member(handle: ChainHandle[Any], name: str) -> None:
    source = handle.get_chain_reference()
    if _is_dunder(name) and read_member(handle._chain_surrogate, name) is NO_VALUE:
        # Protocol probes (pickle, hasattr) expect AttributeError
        raise AttributeError(
            f"'{type(source).__qualname__}' object has no attribute '{name}'"
        )
    if handle._chain_config.strict:
        require_member(source, name)


def _record(handle: ChainHandle[Any], name: str, kind: EntryKind, value: Any) -> None:
    position = handle._chain_ledger.append(value, member=name, kind=kind)
    logger.debug("chain step %d: %s %s -> %r", position, kind.value, name, value)


def _forward_call(
    handle: ChainHandle[T],
    name: str,
    member: Callable[..., Any],
) -> Callable[..., ChainHandle[T]]:
    def call(*args: Any, **kwargs: Any) -> ChainHandle[T]:
        result = member(*args, **kwargs)
        _record(handle, name, EntryKind.CALL, result)
        return handle

    call.__name__ = name
    call.__doc__ = getattr(member, "__doc__", None)
    return call


def _forward_access(handle: ChainHandle[T], name: str) -> Callable[..., ChainHandle[T]]:
    def access(*args: Any) -> ChainHandle[T]:
        if len(args) > 1:
            raise TypeError(f"{name}() takes at most 1 argument ({len(args)} given)")
        surrogate = handle._chain_surrogate
        if args:
            write_member(surrogate, name, args[0])
            _record(handle, name, EntryKind.WRITE, args[0])
        else:
            _record(handle, name, EntryKind.READ, read_member(surrogate, name))
        return handle

    access.__name__ = name
    return access


# =============================================================================
# PUBLIC ENTRY POINTS
# =============================================================================

def wrap(source: T, config: Optional[ChainConfig] = None) -> ChainHandle[T]:
    """
    Wrap a value so that every member access can be chained.

    The handle keeps config (or the process default at this moment) for
    its whole lifetime. The source is never copied: mutating calls are
    visible on the original reference.
    """
    return ChainHandle(source, config)


def history(handle: ChainHandle[Any]) -> Ledger:
    """
    Get the Ledger behind a handle.

    Reading it is not a chained access and records nothing.
    """
    if not isinstance(handle, ChainHandle):
        raise TypeError(f"expected ChainHandle, got {type(handle)}")
    return object.__getattribute__(handle, "_chain_ledger")
