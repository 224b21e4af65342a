import logging
import threading

import redis
from django.conf import settings
from redis.exceptions import LockError, RedisError


logger = logging.getLogger(__name__)


class LockUnavailable(Exception):
    pass


class _LocalHeld:
    def __init__(self, locks, key, lock):
        self._locks = locks
        self._key = key
        self._lock = lock

    def release(self):
        self._lock.release()
        self._locks._forget(self._key)


class LocalLocks:
    """
    Per-key locks living in this process. Only suitable when a single process
    serves requests and runs the sweeper.

    A key is kept only while someone holds or waits for it.
    """

    def __init__(self, wait=10):
        self.wait = wait
        self._guard = threading.Lock()
        self._locks = {}

    def acquire(self, key, timeout=None, blocking=True):
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        lock = entry[0]
        if blocking:
            acquired = lock.acquire(timeout=self.wait)
        else:
            acquired = lock.acquire(blocking=False)
        if not acquired:
            self._forget(key)
            raise LockUnavailable(key)
        return _LocalHeld(self, key, lock)

    def _forget(self, key):
        with self._guard:
            entry = self._locks[key]
            entry[1] -= 1
            if not entry[1]:
                del self._locks[key]


class _RedisHeld:
    def __init__(self, lock, key):
        self._lock = lock
        self._key = key

    def release(self):
        try:
            self._lock.release()
        except LockError:
            logger.warning('Lock %s expired before it was released', self._key)


class RedisLocks:
    def __init__(self, url, timeout=60, wait=10):
        self.timeout = timeout
        self.wait = wait
        self._redis = redis.from_url(url)

    def acquire(self, key, timeout=None, blocking=True):
        lock = self._redis.lock('ddns:{}'.format(key), timeout=timeout or self.timeout,
                                blocking_timeout=self.wait)
        try:
            acquired = lock.acquire(blocking=blocking)
        except RedisError as excp:
            raise LockUnavailable(key) from excp
        if not acquired:
            raise LockUnavailable(key)
        return _RedisHeld(lock, key)


def from_settings():
    wait = getattr(settings, 'DDNS_LOCK_WAIT', 10)
    if settings.LOCK_SERVER_URL:
        return RedisLocks(settings.LOCK_SERVER_URL,
                          timeout=getattr(settings, 'DDNS_LOCK_TIMEOUT', 60), wait=wait)
    return LocalLocks(wait=wait)
