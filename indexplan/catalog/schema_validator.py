from .table_info import ColumnDef, TableMetadata
from ..core.types import FieldType


class SchemaValidator:
    """🔍 Validates table definitions before they enter the catalog.

    🏗️ Ensures tables are created correctly
    ✅ Validates column names and types
    """

    def __init__(self):
        """
        🎬 Initialize validator with empty error list.
        """
        self.validation_errors: list[str] = []

    def validate_table_creation(self, metadata: TableMetadata) -> bool:
        """
        🔍 Validate that a new table can be created.

        Name clashes with existing tables are reported separately by the
        catalog as DuplicateTable; this checks the definition itself.

        Args:
            metadata: Metadata for the table to create.

        Returns:
            True if valid, False otherwise
        """
        self.validation_errors.clear()

        if not metadata.table_name or not metadata.table_name.strip():
            self.validation_errors.append("Table name must not be empty")

        if not metadata.columns:
            self.validation_errors.append(
                "Table must define at least one column")

        names = [c.name for c in metadata.columns]
        if len(names) != len(set(names)):
            self.validation_errors.append("Duplicate column names in table schema")

        for column in metadata.columns:
            self._validate_column(column)

        return len(self.validation_errors) == 0

    def get_validation_errors(self) -> list[str]:
        """Get list of validation errors from last validation."""
        return self.validation_errors.copy()

    def _validate_column(self, column: ColumnDef) -> None:
        if not isinstance(column.name, str) or not column.name.strip():
            self.validation_errors.append("Column name must be a non-empty string")
        if not isinstance(column.field_type, FieldType):
            self.validation_errors.append(
                f"Column '{column.name}' has unknown type {column.field_type!r}")
