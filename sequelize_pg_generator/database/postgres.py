"""PostgreSQL catalog introspector."""

import logging
from typing import Any, Dict, List, Optional, Sequence

import psycopg2
from psycopg2.extras import RealDictCursor

from ..errors import DatabaseConnectionError, IntrospectionError
from .base import CatalogIntrospector
from .models import CatalogColumnRow, ForeignKeyRow

logger = logging.getLogger(__name__)


TABLES_QUERY = """
SELECT
    table_name
FROM information_schema.tables
WHERE table_catalog = %s
AND table_schema = %s
ORDER BY table_name"""

COLUMNS_QUERY = """
SELECT
    c.column_name,
    c.ordinal_position,
    c.column_default,
    c.is_nullable,
    c.data_type,
    c.character_maximum_length,
    c.numeric_precision,
    c.udt_name::regtype::text                        AS udt_name,
    ARRAY_AGG(DISTINCT e.enumlabel::text)            AS enum_values,
    ARRAY_AGG(DISTINCT tc.constraint_type::varchar)  AS keys
FROM information_schema.columns c
LEFT OUTER JOIN information_schema.key_column_usage k
    ON k.table_catalog = c.table_catalog
    AND k.table_schema = c.table_schema
    AND k.table_name = c.table_name
    AND k.column_name = c.column_name
LEFT OUTER JOIN information_schema.table_constraints tc
    ON tc.table_catalog = k.table_catalog
    AND tc.table_schema = k.table_schema
    AND tc.table_name = k.table_name
    AND tc.constraint_name = k.constraint_name
LEFT OUTER JOIN pg_type t
    ON t.typname = c.udt_name
    AND c.data_type = 'USER-DEFINED'
LEFT OUTER JOIN pg_enum e
    ON e.enumtypid = t.oid
WHERE c.table_catalog = %s
AND c.table_schema = %s
AND c.table_name = %s
GROUP BY 1, 2, 3, 4, 5, 6, 7, 8
ORDER BY c.ordinal_position"""

FOREIGN_KEYS_QUERY = """
SELECT
    tc.constraint_name,
    tc.table_name,
    kcu.column_name,
    ccu.table_name     AS reference_table,
    ccu.column_name    AS reference_column,
    pk.constraint_name AS pri_key
FROM information_schema.table_constraints tc
INNER JOIN information_schema.constraint_column_usage ccu
    ON ccu.constraint_schema = tc.constraint_schema
    AND ccu.constraint_name = tc.constraint_name
INNER JOIN information_schema.key_column_usage kcu
    ON kcu.constraint_schema = tc.constraint_schema
    AND kcu.constraint_name = tc.constraint_name
LEFT OUTER JOIN (
    SELECT
        tc2.constraint_name,
        tc2.table_schema,
        tc2.table_name,
        kcu2.column_name
    FROM information_schema.table_constraints tc2
    INNER JOIN information_schema.key_column_usage kcu2
        ON kcu2.constraint_schema = tc2.constraint_schema
        AND kcu2.constraint_name = tc2.constraint_name
    WHERE tc2.constraint_type = 'PRIMARY KEY'
) pk
    ON pk.column_name = kcu.column_name
    AND pk.table_name = tc.table_name
    AND pk.table_schema = tc.table_schema
WHERE tc.constraint_type = 'FOREIGN KEY'
AND tc.constraint_catalog = %s
AND tc.constraint_schema = %s
ORDER BY tc.table_name, kcu.column_name, reference_table, reference_column"""


class PostgresIntrospector(CatalogIntrospector):
    """Runs the catalog queries for one PostgreSQL database schema."""

    def __init__(
        self,
        database: str,
        host: str = "localhost",
        port: Optional[int] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        schema: str = "public",
    ):
        self.database = database
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.schema = schema
        self._connection = None

    @property
    def dsn(self) -> str:
        """Connection description for logs (no password)."""
        port = f":{self.port}" if self.port else ""
        return f"{self.user}@{self.host}{port}/{self.database}"

    def connect(self):
        """Connect to PostgreSQL, reusing an open connection."""
        if self._connection is not None:
            return self._connection

        logger.info("connecting to postgres using %s", self.dsn)
        params: Dict[str, Any] = {"host": self.host, "dbname": self.database}
        if self.port:
            params["port"] = self.port
        if self.user:
            params["user"] = self.user
        if self.password:
            params["password"] = self.password

        try:
            self._connection = psycopg2.connect(**params)
        except psycopg2.Error as e:
            raise DatabaseConnectionError(
                f"Cannot connect to {self.dsn}: {e}",
                details={"dsn": self.dsn},
            ) from e
        logger.info("successfully connected to postgres")
        return self._connection

    def close(self):
        """Close the connection."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None

    def run_query(self, sql: str, params: Sequence[Any]) -> List[Dict[str, Any]]:
        """Execute a catalog query and return its rows as dicts.

        Raises:
            IntrospectionError: If the query fails
        """
        connection = self.connect()
        logger.debug("%s :: [ %s ]", sql, ", ".join(str(p) for p in params))
        cursor = connection.cursor(cursor_factory=RealDictCursor)
        try:
            cursor.execute(sql, tuple(params))
            return [dict(row) for row in cursor.fetchall()]
        except psycopg2.Error as e:
            raise IntrospectionError(
                f"Catalog query failed: {e}",
                details={"params": [str(p) for p in params]},
            ) from e
        finally:
            cursor.close()

    def get_tables(self) -> List[str]:
        logger.info("fetching tables")
        rows = self.run_query(TABLES_QUERY, [self.database, self.schema])
        logger.info("found %d tables", len(rows))
        return [row["table_name"] for row in rows]

    def get_columns(self, table: str) -> List[CatalogColumnRow]:
        rows = self.run_query(COLUMNS_QUERY, [self.database, self.schema, table])
        logger.info("found %d columns for %s", len(rows), table)
        return [CatalogColumnRow.from_row(row) for row in rows]

    def get_foreign_keys(self) -> List[ForeignKeyRow]:
        logger.info("fetching foreign keys")
        rows = self.run_query(FOREIGN_KEYS_QUERY, [self.database, self.schema])
        logger.info("found %d foreign keys", len(rows))
        return [ForeignKeyRow.from_row(row) for row in rows]
