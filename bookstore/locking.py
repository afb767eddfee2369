"""Shared/exclusive lock for the catalog."""
from threading import Condition, Lock


def create_locks():
    """
    Return a pair of locks: (read_lock, write_lock)

    The read_lock can be held by any number of threads at once. Only one
    thread can hold the write_lock, and only while no read_lock is held.

    Both are meant to be used in with statements and operate on a single
    underlying lock. Neither is reentrant: a thread must release one
    before acquiring either again.
    """
    lock = SharedLock()
    return LockWrapper(lock), LockWrapper(lock, is_shared=False)


class SharedLock:
    '''
    Multiple readers, single writer.

    New readers queue behind a waiting writer, and a releasing writer hands
    the lock to every queued reader at once, so neither side can starve
    the other.
    '''

    def __init__(self):
        self._cond = Condition(Lock())
        self.readers = 0
        self.writing = False
        self.waiting_readers = 0
        self.waiting_writers = 0
        # Bumped each time queued readers are handed the lock
        self._generation = 0

    def acquire(self, shared=False):
        with self._cond:
            if shared:
                self._acquire_shared()
            else:
                self._acquire_exclusive()

    def release(self, shared=False):
        with self._cond:
            if shared:
                if not self.readers:
                    raise RuntimeError("release() called on unheld shared lock")
                self.readers -= 1
                if not self.readers:
                    self._cond.notify_all()
            else:
                if not self.writing:
                    raise RuntimeError("release() called on unheld exclusive lock")
                self.writing = False
                self._grant_readers()
                self._cond.notify_all()

    def _grant_readers(self):
        if self.waiting_readers:
            self.readers += self.waiting_readers
            self.waiting_readers = 0
            self._generation += 1

    def _acquire_shared(self):
        if not self.writing and not self.waiting_writers:
            self.readers += 1
            return
        generation = self._generation
        self.waiting_readers += 1
        try:
            while self._generation == generation:
                self._cond.wait()
        except BaseException:
            if self._generation == generation:
                self.waiting_readers -= 1
            else:
                self.readers -= 1
                if not self.readers:
                    self._cond.notify_all()
            raise

    def _acquire_exclusive(self):
        self.waiting_writers += 1
        try:
            while self.writing or self.readers:
                self._cond.wait()
        except BaseException:
            self.waiting_writers -= 1
            if not self.writing and not self.waiting_writers:
                self._grant_readers()
            self._cond.notify_all()
            raise
        self.waiting_writers -= 1
        self.writing = True


class LockWrapper:

    def __init__(self, lock, is_shared=True):
        self._lock = lock
        self._is_shared = is_shared

    def acquire(self):
        self._lock.acquire(shared=self._is_shared)

    def release(self, *args):
        self._lock.release(shared=self._is_shared)

    __enter__ = acquire
    __exit__ = release
