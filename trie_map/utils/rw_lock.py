# rw_lock.py - reader/writer lock shared by every node of one TrieMap

import threading
from contextlib import nullcontext


class RWLock:
    """
    Reader-writer lock with writer preference so writers don't starve.
    Not reentrant: a thread holding either side must not acquire again.
    Usage:
        with rw.read_lock(): ...
        with rw.write_lock(): ...
    """

    def __init__(self) -> None:
        self._mu = threading.Lock()
        self._ok_to_read = threading.Condition(self._mu)
        self._ok_to_write = threading.Condition(self._mu)
        self._active_readers = 0
        self._active_writers = 0
        self._waiting_writers = 0

    class _ReadCtx:
        def __init__(self, rw: "RWLock") -> None:
            self.rw = rw

        def __enter__(self):
            rw = self.rw
            with rw._mu:
                # block new readers while a writer holds or waits
                while rw._active_writers or rw._waiting_writers:
                    rw._ok_to_read.wait()
                rw._active_readers += 1
            return self

        def __exit__(self, exc_type, exc, tb):
            rw = self.rw
            with rw._mu:
                rw._active_readers -= 1
                if rw._active_readers == 0:
                    rw._ok_to_write.notify()
            return False

    class _WriteCtx:
        def __init__(self, rw: "RWLock") -> None:
            self.rw = rw

        def __enter__(self):
            rw = self.rw
            with rw._mu:
                rw._waiting_writers += 1
                while rw._active_writers or rw._active_readers:
                    rw._ok_to_write.wait()
                rw._waiting_writers -= 1
                rw._active_writers = 1
            return self

        def __exit__(self, exc_type, exc, tb):
            rw = self.rw
            with rw._mu:
                rw._active_writers = 0
                if rw._waiting_writers:
                    rw._ok_to_write.notify()
                else:
                    rw._ok_to_read.notify_all()
            return False

    def read_lock(self) -> "RWLock._ReadCtx":
        return RWLock._ReadCtx(self)

    def write_lock(self) -> "RWLock._WriteCtx":
        return RWLock._WriteCtx(self)

    @property
    def readers(self) -> int:
        with self._mu:
            return self._active_readers


class NullLock:
    """Same interface as RWLock, but takes nothing. For single-threaded use."""

    def read_lock(self) -> nullcontext:
        return nullcontext()

    def write_lock(self) -> nullcontext:
        return nullcontext()

    @property
    def readers(self) -> int:
        return 0
