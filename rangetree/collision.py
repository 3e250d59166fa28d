"""
Collision handling for the interval tree.

A collision happens when an inserted key is equivalent to the key of a node
already in the tree. The tree then hands the node's current state and the new
value to a collision handler and stores whatever the handler returns.
"""

from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

K = TypeVar('K')
V = TypeVar('V')


@dataclass
class Interval(Generic[K, V]):
    """State of one tree node: a key and every value merged under it."""
    key: K
    values: list[V] = field(default_factory=list)


# (existing node state, new value) -> new node state
CollisionHandler = Callable[[Interval[K, V], V], Interval[K, V]]


def replace(existing: Interval[K, V], new: V) -> Interval[K, V]:
    """Overwrite semantics: only the latest value is kept."""
    return Interval(existing.key, [new])


def append(existing: Interval[K, V], new: V) -> Interval[K, V]:
    """
    Keep every value, in the order they were inserted.

    Extends the node's own list in place; search results are copies, so
    nothing outside the tree sees the change.
    """
    existing.values.append(new)
    return existing


HANDLERS: dict[str, CollisionHandler] = {
    'replace': replace,
    'append': append,
}


def get_handler(name: str) -> CollisionHandler:
    """Look up a built-in collision handler by its configuration name."""
    if not isinstance(name, str):
        raise ValueError(f"Collision policy must be a string, got {name!r}")
    try:
        return HANDLERS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown collision policy '{name}' (expected one of: {', '.join(HANDLERS)})"
        )
