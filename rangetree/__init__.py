"""
rangetree

A thread-safe AVL tree keyed by a caller-supplied ordering, with pluggable
collision handling and closed-range search:
- Balanced tree, insert/delete/search (interval_tree.py)
- Collision handlers replace and append (collision.py)
- Ordering predicates, including timezone-safe datetimes (ordering.py)
- Reader/writer lock (locks.py)
- TOML configuration (config.py)
"""

from .interval_tree import IntervalTree, Entry, new, unique, duplicates
from .collision import Interval, CollisionHandler, replace, append
from .ordering import LessThan, equivalent, natural_less, reverse_less, key_less, datetime_less
from .locks import ReadWriteLock
from .config import Config, TreeConfig

__all__ = [
    'IntervalTree',
    'Entry',
    'new',
    'unique',
    'duplicates',
    'Interval',
    'CollisionHandler',
    'replace',
    'append',
    'LessThan',
    'equivalent',
    'natural_less',
    'reverse_less',
    'key_less',
    'datetime_less',
    'ReadWriteLock',
    'Config',
    'TreeConfig',
]
