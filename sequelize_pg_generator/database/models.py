"""Catalog row models produced by database introspection."""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Tuple

PRIMARY_KEY = "PRIMARY KEY"
FOREIGN_KEY = "FOREIGN KEY"


def parse_pg_array(value: Any) -> Tuple[str, ...]:
    """Normalize an aggregated Postgres array to a tuple of strings.

    Drivers return either a Python list or the text form (``{a,b}``) when
    they have no typecaster for the element type. NULL members, which
    ``ARRAY_AGG`` produces for unmatched outer joins, are dropped.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        inner = value.strip()
        if inner.startswith("{") and inner.endswith("}"):
            inner = inner[1:-1]
        if not inner:
            return ()
        items: Iterable[Any] = [item.strip().strip('"') for item in inner.split(",")]
        return tuple(item for item in items if item and item.upper() != "NULL")
    return tuple(str(item) for item in value if item is not None)


@dataclass(frozen=True)
class CatalogColumnRow:
    """Raw facts about one column, as returned by the column catalog query."""
    name: str
    data_type: str
    ordinal_position: int = 0
    column_default: Optional[str] = None
    is_nullable: bool = True
    character_maximum_length: Optional[int] = None
    numeric_precision: Optional[int] = None
    udt_name: Optional[str] = None
    enum_values: Tuple[str, ...] = ()
    keys: Tuple[str, ...] = ()

    @property
    def is_primary_key(self) -> bool:
        return PRIMARY_KEY in self.keys

    @property
    def is_foreign_key(self) -> bool:
        return FOREIGN_KEY in self.keys

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CatalogColumnRow":
        """Build from a driver row keyed by the column query's column names."""
        nullable = row.get("is_nullable")
        if isinstance(nullable, str):
            nullable = nullable.upper() == "YES"
        udt_name = row.get("udt_name")
        return cls(
            name=row["column_name"],
            data_type=row["data_type"],
            ordinal_position=row.get("ordinal_position") or 0,
            column_default=row.get("column_default"),
            is_nullable=bool(nullable),
            character_maximum_length=row.get("character_maximum_length"),
            numeric_precision=row.get("numeric_precision"),
            udt_name=str(udt_name) if udt_name is not None else None,
            enum_values=parse_pg_array(row.get("enum_values")),
            keys=parse_pg_array(row.get("keys")),
        )


@dataclass(frozen=True)
class ForeignKeyRow:
    """One foreign-key constraint column and what it references.

    ``primary_key`` names the primary-key constraint the owning column is part
    of, if any. ``other_table``/``other_column`` describe the pivot partner:
    another foreign key of the same table sharing that primary key.
    """
    constraint_name: str
    table_name: str
    column_name: str
    reference_table: str
    reference_column: str
    primary_key: Optional[str] = None
    other_table: Optional[str] = None
    other_column: Optional[str] = None

    @property
    def description(self) -> str:
        return (
            f"{self.table_name}.{self.column_name} -> "
            f"{self.reference_table}.{self.reference_column} ({self.constraint_name})"
        )

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ForeignKeyRow":
        return cls(
            constraint_name=row["constraint_name"],
            table_name=row["table_name"],
            column_name=row["column_name"],
            reference_table=row["reference_table"],
            reference_column=row["reference_column"],
            primary_key=row.get("pri_key"),
            other_table=row.get("other_table"),
            other_column=row.get("other_column"),
        )
