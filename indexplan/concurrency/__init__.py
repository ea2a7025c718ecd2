from .locks import ReadWriteLock, LockTimeoutError

__all__ = ["ReadWriteLock", "LockTimeoutError"]
