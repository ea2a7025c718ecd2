"""
Primitive types and identifiers used throughout the index planner.

This module contains basic types that have no dependencies on other parts
of the system, avoiding circular imports.
"""

from .row_id import RowId, RowIdGenerator

__all__ = ["RowId", "RowIdGenerator"]
