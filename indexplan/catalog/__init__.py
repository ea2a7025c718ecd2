from .catalog import Catalog
from .persistence import CatalogPersistence
from .schema_validator import SchemaValidator
from .table_info import ColumnDef, IndexDef, IndexKind, TableMetadata

__all__ = [
    "Catalog",
    "CatalogPersistence",
    "SchemaValidator",
    "ColumnDef",
    "IndexDef",
    "IndexKind",
    "TableMetadata",
]
