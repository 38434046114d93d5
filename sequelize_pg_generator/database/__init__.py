"""Catalog introspection for sequelize-pg-generator.

Runs the PostgreSQL catalog queries and returns raw row models.
"""

from .models import CatalogColumnRow, ForeignKeyRow, FOREIGN_KEY, PRIMARY_KEY, parse_pg_array
from .base import CatalogIntrospector
from .postgres import PostgresIntrospector

__all__ = [
    # Row models
    "CatalogColumnRow",
    "ForeignKeyRow",
    "FOREIGN_KEY",
    "PRIMARY_KEY",
    "parse_pg_array",
    # Introspectors
    "CatalogIntrospector",
    "PostgresIntrospector",
]
