"""
Height-balanced (AVL) ordered container with range search.

Keys are ordered by a caller-supplied less-than predicate. Inserting a key
that is equivalent to a stored key does not add a node; the tree's collision
handler merges the new value into the existing node instead. A single
reader/writer lock guards the whole tree.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, TYPE_CHECKING

from .collision import CollisionHandler, Interval, append, get_handler, replace
from .diagnostics import debug
from .locks import ReadWriteLock
from .ordering import LessThan, natural_less, reverse_less

if TYPE_CHECKING:
    from .config import TreeConfig

K = TypeVar('K')
V = TypeVar('V')


@dataclass(frozen=True)
class Entry(Generic[K, V]):
    """One (key, value) pair returned by a range search."""
    key: K
    value: V


class _Node(Generic[K, V]):
    __slots__ = ['interval', 'left', 'right', 'height']

    def __init__(self, key: K, value: V):
        self.interval: Interval[K, V] = Interval(key, [value])
        self.left: Optional['_Node[K, V]'] = None
        self.right: Optional['_Node[K, V]'] = None
        self.height: int = 1

    @property
    def key(self) -> K:
        return self.interval.key


class IntervalTree(Generic[K, V]):

    def __init__(self, less: LessThan, collision_handler: CollisionHandler, verify: bool = False):
        """
        Args:
            less: Strict less-than predicate over keys. Fixed for the
                lifetime of the tree.
            collision_handler: Called as ``handler(existing, value)`` when an
                inserted key is equivalent to a stored one; its result
                becomes the node's new state.
            verify: Check every invariant after each insert and delete.
        """
        self._root: Optional[_Node[K, V]] = None
        self._less = less
        self._collision_handler = collision_handler
        self._verify = verify
        self._lock = ReadWriteLock()

    @classmethod
    def unique(cls, less: LessThan) -> 'IntervalTree[K, V]':
        """Tree where a repeated key overwrites the stored value."""
        return cls(less, replace)

    @classmethod
    def duplicates(cls, less: LessThan) -> 'IntervalTree[K, V]':
        """Tree where a repeated key keeps every value in arrival order."""
        return cls(less, append)

    @classmethod
    def from_config(cls, config: 'TreeConfig', less: Optional[LessThan] = None) -> 'IntervalTree[K, V]':
        if less is None:
            less = reverse_less if config.reverse else natural_less
        return cls(less, get_handler(config.policy), verify=config.verify)

    # --- Internal Utilities ---

    @staticmethod
    def _get_height(node: Optional[_Node[K, V]]) -> int:
        return node.height if node else 0

    def _update(self, node: _Node[K, V]):
        node.height = 1 + max(self._get_height(node.left), self._get_height(node.right))

    def _get_balance(self, node: Optional[_Node[K, V]]) -> int:
        if not node:
            return 0
        return self._get_height(node.left) - self._get_height(node.right)

    def _rotate_right(self, node: _Node[K, V]) -> _Node[K, V]:
        debug(f"Rotate right at {node.key!r}")
        left = node.left
        node.left = left.right
        left.right = node
        self._update(node)
        self._update(left)
        return left

    def _rotate_left(self, node: _Node[K, V]) -> _Node[K, V]:
        debug(f"Rotate left at {node.key!r}")
        right = node.right
        node.right = right.left
        right.left = node
        self._update(node)
        self._update(right)
        return right

    def _insert(self, node: Optional[_Node[K, V]], key: K, value: V) -> _Node[K, V]:
        if not node:
            debug(f"New node {key!r}")
            return _Node(key, value)

        if self._less(key, node.key):
            node.left = self._insert(node.left, key, value)
        elif self._less(node.key, key):
            node.right = self._insert(node.right, key, value)
        else:
            debug(f"Collision at {node.key!r}")
            node.interval = self._collision_handler(node.interval, value)

        self._update(node)

        # Only one key was added below this node, so comparing it against
        # the child's key tells which grandchild grew.
        balance = self._get_balance(node)
        if balance > 1 and self._less(key, node.left.key):
            return self._rotate_right(node)
        if balance < -1 and self._less(node.right.key, key):
            return self._rotate_left(node)
        if balance > 1 and self._less(node.left.key, key):
            node.left = self._rotate_left(node.left)
            return self._rotate_right(node)
        if balance < -1 and self._less(key, node.right.key):
            node.right = self._rotate_right(node.right)
            return self._rotate_left(node)
        return node

    def _delete(self, node: Optional[_Node[K, V]], key: K) -> Optional[_Node[K, V]]:
        if not node:
            return None

        if self._less(key, node.key):
            node.left = self._delete(node.left, key)
        elif self._less(node.key, key):
            node.right = self._delete(node.right, key)
        elif not node.left or not node.right:
            debug(f"Delete node {node.key!r}")
            # Zero or one child: the child (or nothing) takes this place
            return node.left or node.right
        else:
            successor = node.right
            while successor.left:
                successor = successor.left
            debug(f"Delete node {node.key!r}, successor {successor.key!r} moves up")
            node.interval = successor.interval
            node.right = self._delete(node.right, successor.key)

        self._update(node)

        # Deletion shortens one side, so the taller child's own balance
        # decides between a single and a double rotation.
        balance = self._get_balance(node)
        if balance > 1 and self._get_balance(node.left) >= 0:
            return self._rotate_right(node)
        if balance < -1 and self._get_balance(node.right) <= 0:
            return self._rotate_left(node)
        if balance > 1 and self._get_balance(node.left) < 0:
            node.left = self._rotate_left(node.left)
            return self._rotate_right(node)
        if balance < -1 and self._get_balance(node.right) > 0:
            node.right = self._rotate_right(node.right)
            return self._rotate_left(node)
        return node

    def _search(self, node: Optional[_Node[K, V]], start: K, end: K, results: list[Entry[K, V]]):
        if not node:
            return
        if self._less(end, node.key):
            self._search(node.left, start, end, results)
        elif self._less(node.key, start):
            self._search(node.right, start, end, results)
        else:
            self._search(node.left, start, end, results)
            results.extend(Entry(node.key, value) for value in node.interval.values)
            self._search(node.right, start, end, results)

    def _check(self, node: Optional[_Node[K, V]], low: Optional[_Node[K, V]], high: Optional[_Node[K, V]]) -> int:
        if not node:
            return 0
        if low and not self._less(low.key, node.key):
            raise RuntimeError(f"Order Violation at {node.key!r}: not after {low.key!r}")
        if high and not self._less(node.key, high.key):
            raise RuntimeError(f"Order Violation at {node.key!r}: not before {high.key!r}")

        left_h = self._check(node.left, low, node)
        right_h = self._check(node.right, node, high)

        if abs(left_h - right_h) > 1:
            raise RuntimeError(f"AVL Violation at {node.key!r}")
        if node.height != 1 + max(left_h, right_h):
            raise RuntimeError(f"Height Violation at {node.key!r}")
        return node.height

    # --- Public API ---

    def insert(self, key: K, value: V) -> None:
        """Insert ``value`` under ``key``, merging on collision."""
        with self._lock.write_locked():
            self._root = self._insert(self._root, key, value)
            if self._verify:
                self._check(self._root, None, None)

    def delete(self, key: K) -> None:
        """Remove ``key`` and all of its values. Absent keys are ignored."""
        with self._lock.write_locked():
            self._root = self._delete(self._root, key)
            if self._verify:
                self._check(self._root, None, None)

    def search(self, start: K, end: K) -> list[Entry[K, V]]:
        """
        Find every entry whose key lies in the closed range [start, end].

        The bounds may be given in either order. Entries come back in
        ascending key order under the tree's predicate; values that share a
        key keep the order the collision handler left them in.

        Returns:
            A new list of Entry objects, empty if nothing matches.
        """
        if self._less(end, start):
            start, end = end, start

        results: list[Entry[K, V]] = []
        with self._lock.read_locked():
            self._search(self._root, start, end, results)
        debug(f"Search [{start!r}, {end!r}] matched {len(results)} entries")
        return results

    # --- Debug Tool ---

    def verify_integrity(self):
        """Raises RuntimeError if ordering, AVL balance or cached heights are violated."""
        with self._lock.read_locked():
            self._check(self._root, None, None)


def new(less: LessThan, collision_handler: CollisionHandler) -> IntervalTree:
    return IntervalTree(less, collision_handler)


def unique(less: LessThan) -> IntervalTree:
    return IntervalTree.unique(less)


def duplicates(less: LessThan) -> IntervalTree:
    return IntervalTree.duplicates(less)
