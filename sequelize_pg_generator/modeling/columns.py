"""Conversion of catalog column rows into model attributes."""

import logging
from typing import List, Optional, Sequence

from ..database.models import CatalogColumnRow
from ..naming import to_camel_case
from .defaults import resolve_default
from .models import ColumnDescriptor
from .type_classifier import classify_column

logger = logging.getLogger(__name__)


def build_column(
    row: CatalogColumnRow,
    include_foreign_keys: bool = False,
    camel_case: bool = False,
) -> Optional[ColumnDescriptor]:
    """Build the attribute descriptor for one column.

    Args:
        row: Column facts from the catalog query
        include_foreign_keys: Keep foreign key columns as attributes
        camel_case: Use camelCase attribute names (the field stays as-is)

    Returns:
        The descriptor, or None when the column is a foreign key and
        foreign keys are excluded
    """
    if row.is_foreign_key and not include_foreign_keys:
        return None

    column_type = classify_column(row)
    default = resolve_default(row.column_default, column_type)

    column = ColumnDescriptor(
        name=to_camel_case(row.name) if camel_case else row.name,
        field=row.name,
        column_type=column_type,
        type_comment=column_type.comment or row.data_type,
        is_primary_key=row.is_primary_key,
        is_foreign_key=row.is_foreign_key,
        allow_null=row.is_nullable,
        default=default,
    )
    logger.info(
        "%s (default=%s, type: %s, nullable: %s)",
        column.field, column.default_value, column_type.storage.render(), column.allow_null,
    )
    return column


def build_columns(
    rows: Sequence[CatalogColumnRow],
    include_foreign_keys: bool = False,
    camel_case: bool = False,
) -> List[ColumnDescriptor]:
    """Build descriptors for a table's columns, keeping catalog order."""
    columns = []
    for row in rows:
        column = build_column(row, include_foreign_keys=include_foreign_keys, camel_case=camel_case)
        if column is not None:
            columns.append(column)
    return columns
