"""
Reader/writer lock guarding a whole tree.

Any number of readers may hold the lock together; a writer holds it alone.
Waiting threads are woken in whatever order ``threading.Condition`` picks.
"""

from contextlib import contextmanager
from threading import Condition, Lock


class ReadWriteLock:
    """A read-write lock that allows multiple readers or a single writer"""

    __slots__ = ('_cond', '_readers', '_writer')

    def __init__(self):
        self._cond = Condition(Lock())
        self._readers = 0
        self._writer = False

    @property
    def readers(self) -> int:
        return self._readers

    @property
    def writer(self) -> bool:
        return self._writer

    def acquire_read(self):
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read without acquire_read")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            while self._writer or self._readers > 0:
                self._cond.wait()
            self._writer = True

    def release_write(self):
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write without acquire_write")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self):
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self):
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
