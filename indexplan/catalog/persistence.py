"""
Catalog persistence management module.
Handles saving/loading schema metadata to/from a JSON file.
"""
import json
import threading
import time
from pathlib import Path

from .table_info import TableMetadata
from ..core.exceptions import DbException


class CatalogPersistence:
    """Handles schema persistence operations. Rows are never written."""

    FORMAT_VERSION = "1.0"

    def __init__(self, schema_file: str | Path):
        self.schema_file = Path(schema_file)
        self._lock = threading.RLock()

    def save(self, tables: dict[str, TableMetadata]) -> Path:
        """Save table and index definitions to the schema file."""
        with self._lock:
            data = {
                "version": self.FORMAT_VERSION,
                "created_at": time.time(),
                "tables": [meta.to_dict() for meta in tables.values()],
            }

            try:
                self.schema_file.parent.mkdir(parents=True, exist_ok=True)

                # Write to temp file first, then rename (atomic operation)
                temp_file = self.schema_file.with_suffix('.tmp')
                with open(temp_file, 'w') as f:
                    json.dump(data, f, indent=2)

                temp_file.replace(self.schema_file)
            except OSError as e:
                raise DbException(f"Failed to save schema: {e}")

            return self.schema_file

    def load(self) -> list[TableMetadata]:
        """Load table definitions in the order they were saved."""
        with self._lock:
            if not self.schema_file.exists():
                raise DbException(f"Schema file not found: {self.schema_file}")

            try:
                with open(self.schema_file, 'r') as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise DbException(f"Failed to load schema: {e}")

            version = data.get("version")
            if version != self.FORMAT_VERSION:
                raise DbException(f"Unsupported schema version: {version}")

            try:
                return [TableMetadata.from_dict(t) for t in data.get("tables", [])]
            except (KeyError, TypeError, ValueError) as e:
                raise DbException(f"Malformed schema file: {e}")
