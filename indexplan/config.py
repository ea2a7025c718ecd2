"""
Centralized configuration for the database
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DatabaseConfig:
    """Settings shared by every component of a Database instance."""

    """📣 Announce catalog and data changes on stderr"""
    verbose: bool = False

    """🗂️ Number of access paths kept in the planner cache (0 disables it)"""
    plan_cache_size: int = 128

    """⏳ Seconds a table lock request waits before failing (None waits forever)"""
    lock_timeout: Optional[float] = None

    def __post_init__(self):
        if self.plan_cache_size < 0:
            raise ValueError(
                f"plan_cache_size must be non-negative, got {self.plan_cache_size}")
        if self.lock_timeout is not None and self.lock_timeout <= 0:
            raise ValueError(
                f"lock_timeout must be positive, got {self.lock_timeout}")


DEFAULT_CONFIG = DatabaseConfig()
