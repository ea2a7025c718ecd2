from .rw_lock import ReadWriteLock, LockTimeoutError

__all__ = ["ReadWriteLock", "LockTimeoutError"]
