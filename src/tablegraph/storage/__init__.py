"""Storage-side collaborators for tablegraph.

- Column types: primitive kinds to SQLAlchemy column types
- DDL: derived schemas to CREATE statements or live tables
"""

from tablegraph.storage.column_types import get_dialect, to_column_type, type_name
from tablegraph.storage.ddl import DDLEmitter

__all__ = ["DDLEmitter", "get_dialect", "to_column_type", "type_name"]
