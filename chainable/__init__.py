# Chainable
# Fluent call chains over any object, with every step's result on record

"""
Core invariant: a chained access always returns the same handle, and its
true result is appended to the handle's ledger at the next position.

    >>> numbers = wrap([3, 1, 2])
    >>> numbers.sort().pop().__len__()
    ChainHandle[list](steps=3, strict=True)
    >>> numbers.get_chain_value_at(1), numbers.get_chain_value_at(2)
    (3, 2)
    >>> numbers.get_chain_reference()
    [1, 2]
"""

from .config import ChainConfig, DEFAULT_STRICT, configure, get_default_config, set_default_config
from .handle import ChainHandle, history, wrap
from .ledger import NO_VALUE, EntryKind, Ledger, LedgerEntry
from .resolver import UnresolvableMemberError, exists

__all__ = [
    "ChainConfig",
    "ChainHandle",
    "DEFAULT_STRICT",
    "EntryKind",
    "Ledger",
    "LedgerEntry",
    "NO_VALUE",
    "UnresolvableMemberError",
    "configure",
    "exists",
    "get_default_config",
    "history",
    "set_default_config",
    "wrap",
]
