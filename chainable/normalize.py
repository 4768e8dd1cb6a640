"""
Primitive Normalizer.

Text and numeric values are immutable and carry no attribute namespace
of their own, so they cannot receive member writes. Wrapping boxes them
into a Boxed surrogate; every other value is used as-is.
"""

from __future__ import annotations

from typing import Any

from .ledger import NO_VALUE


# bool is covered as a subclass of int
PRIMITIVE_TYPES = (str, bytes, int, float, complex)


class Boxed:
    """
    Object-shaped stand-in for a primitive.
    
    Members resolve against the box's own namespace first, then against
    the primitive. Writes always land in the box's own namespace.
    """

    __slots__ = ("value", "__dict__")

    def __init__(self, value: Any):
        self.value = value

    def read(self, name: str, default: Any = NO_VALUE) -> Any:
        if name in self.__dict__:
            return self.__dict__[name]
        return getattr(self.value, name, default)

    def write(self, name: str, value: Any) -> None:
        self.__dict__[name] = value

    def __repr__(self) -> str:
        return f"Boxed({self.value!r})"


def is_primitive(value: Any) -> bool:
    return isinstance(value, PRIMITIVE_TYPES)


def box(value: Any) -> Any:
    """Box a primitive; return anything else unchanged."""
    if is_primitive(value):
        return Boxed(value)
    return value


def unbox(surrogate: Any) -> Any:
    if isinstance(surrogate, Boxed):
        return surrogate.value
    return surrogate


def read_member(surrogate: Any, name: str) -> Any:
    """Current value of a member, or NO_VALUE if it is not set."""
    if isinstance(surrogate, Boxed):
        return surrogate.read(name)
    return getattr(surrogate, name, NO_VALUE)


def write_member(surrogate: Any, name: str, value: Any) -> None:
    """Assign a member. Errors raised by the target propagate."""
    if isinstance(surrogate, Boxed):
        surrogate.write(name, value)
    else:
        setattr(surrogate, name, value)
