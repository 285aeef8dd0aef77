"""CLI context: resolved configuration and shared state."""

import os
from dataclasses import dataclass, field

from sqlalchemy import Engine, create_engine

DEFAULT_DIALECT = "mysql"
DEFAULT_DATABASE_URL = "sqlite:///./tablegraph.db"


def get_dialect_name(dialect: str | None) -> str:
    """Resolve the DDL dialect from CLI arg, environment variable, or default.

    Priority:
    1. Explicit dialect argument
    2. TABLEGRAPH_DIALECT environment variable
    3. Default: mysql
    """
    if dialect:
        return dialect
    if env_dialect := os.getenv("TABLEGRAPH_DIALECT"):
        return env_dialect
    return DEFAULT_DIALECT


def get_database_url(url: str | None) -> str:
    """Resolve the database URL from CLI arg, environment variable, or default.

    Priority:
    1. Explicit URL argument
    2. TABLEGRAPH_DATABASE_URL environment variable
    3. Default: sqlite:///./tablegraph.db
    """
    if url:
        return url
    if env_url := os.getenv("TABLEGRAPH_DATABASE_URL"):
        return env_url
    return DEFAULT_DATABASE_URL


@dataclass
class CLIContext:
    """Shared context for CLI commands.

    Holds output preferences and the lazily created database engine used by
    `apply`.
    """

    dialect: str
    database_url: str
    json_output: bool
    echo: bool = False
    _engine: Engine | None = field(default=None, init=False, repr=False)

    def get_engine(self) -> Engine:
        """Get or create the database engine (lazy initialization)."""
        if self._engine is None:
            self._engine = create_engine(self.database_url, echo=self.echo)
        return self._engine

    def close(self) -> None:
        """Dispose of the engine if one was created."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
