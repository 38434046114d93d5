"""Abstract base class for catalog introspection."""

from abc import ABC, abstractmethod
from typing import List

from .models import CatalogColumnRow, ForeignKeyRow


class CatalogIntrospector(ABC):
    """Abstract base class for catalog introspection.

    Subclasses run the catalog queries for one database/schema and return
    raw rows; interpreting them is left to the modeling package.
    """

    @abstractmethod
    def connect(self):
        """Establish connection to the database."""
        pass

    @abstractmethod
    def close(self):
        """Close the database connection."""
        pass

    @abstractmethod
    def get_tables(self) -> List[str]:
        """Get the table names of the schema, in catalog order."""
        pass

    @abstractmethod
    def get_columns(self, table: str) -> List[CatalogColumnRow]:
        """Get the column rows of a table, ordered by ordinal position."""
        pass

    @abstractmethod
    def get_foreign_keys(self) -> List[ForeignKeyRow]:
        """Get every foreign-key row of the schema."""
        pass

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
