"""
Capability Resolver.

Answers one question: is a member name declared anywhere along a
value's capability chain?

The chain is the value's own namespace followed by each ancestor that
attribute lookup would consult:
    instance  — instance namespace, then every class in type(value).__mro__
    class     — every class in its own __mro__, then the metaclass __mro__

Resolution always runs against the original value, never the boxed
surrogate, so a custom class is validated against its own hierarchy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)


class UnresolvableMemberError(TypeError):
    """Raised when strict mode rejects a member missing from the whole chain."""

    def __init__(self, member_name: str, target_type: type):
        self.member_name = member_name
        self.target_type = target_type
        super().__init__(
            f"Chainable: the member '{member_name}' is not available on "
            f"{target_type.__qualname__} or any of its ancestors"
        )


@dataclass(frozen=True)
class CapabilityLink:
    """
    One link of a capability chain.
    
    members holds only the names declared directly on owner. ancestor is
    the next link, or None at the root.
    """
    owner: Any
    members: frozenset[str]
    ancestor: Optional[CapabilityLink] = None


def _own_members(owner: Any) -> frozenset[str]:
    """Names declared directly on owner (empty if it has no namespace)."""
    try:
        return frozenset(vars(owner))
    except TypeError:
        return frozenset()


def _describe(owner: Any) -> str:
    if isinstance(owner, type):
        return owner.__qualname__
    return f"{type(owner).__qualname__} instance"


def _chain_owners(original: Any) -> list[Any]:
    if isinstance(original, type):
        return [*original.__mro__, *type(original).__mro__]
    return [original, *type(original).__mro__]


def capability_chain(original: Any) -> CapabilityLink:
    """Build the linked capability chain for a value, root last."""
    link: Optional[CapabilityLink] = None
    for owner in reversed(_chain_owners(original)):
        link = CapabilityLink(
            owner=owner,
            members=_own_members(owner),
            ancestor=link,
        )
    # object always ends a chain, so at least one link exists
    return link


def _find_link(link: Optional[CapabilityLink], name: str) -> Optional[CapabilityLink]:
    if link is None:
        return None
    if name in link.members:
        return link
    return _find_link(link.ancestor, name)


def member_exists(link: Optional[CapabilityLink], name: str) -> bool:
    """Walk from link towards the root; a missing link ends the search."""
    return _find_link(link, name) is not None


def exists(original: Any, name: str) -> bool:
    """Check whether name is declared anywhere on original's capability chain."""
    return member_exists(capability_chain(original), name)


def locate_member(original: Any, name: str) -> Optional[Any]:
    """Return the owner that declares name, or None if no link does."""
    found = _find_link(capability_chain(original), name)
    if found is None:
        return None
    return found.owner


def chain_members(original: Any) -> set[str]:
    """Every member name reachable on the chain."""
    names: set[str] = set()
    link: Optional[CapabilityLink] = capability_chain(original)
    while link is not None:
        names |= link.members
        link = link.ancestor
    return names


def require_member(original: Any, name: str) -> None:
    """
    Enforce that name resolves on original's chain.
    
    Raises:
        UnresolvableMemberError: If no link declares name
    """
    owner = locate_member(original, name)
    if owner is None:
        logger.debug(
            "strict mode rejected member %r on %s",
            name, type(original).__qualname__,
        )
        raise UnresolvableMemberError(name, type(original))
    logger.debug("member %r resolved on %s", name, _describe(owner))
