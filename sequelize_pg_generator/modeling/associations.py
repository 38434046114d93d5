"""Association resolution from foreign-key constraints.

A table whose primary key is made of two foreign keys is treated as the pivot
of a many-to-many relation between the two referenced tables. Every other
foreign key becomes a plain belongs-to on the table that owns it.

The pivot check only looks for foreign keys sharing a primary-key constraint,
so a join table with its own surrogate ``id`` key is not recognised and yields
two belongs-to relations instead.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Sequence

from ..database.models import ForeignKeyRow
from ..naming import to_camel_case
from .models import AssociationDescriptor, AssociationKind

logger = logging.getLogger(__name__)


@dataclass
class AssociationIndex:
    """Resolved associations for a schema.

    ``relations`` holds one descriptor per foreign-key row, in row order.
    ``by_table`` maps each table to the associations it exposes; the same
    target may be registered more than once.
    """
    relations: List[AssociationDescriptor] = field(default_factory=list)
    by_table: Dict[str, List[AssociationDescriptor]] = field(default_factory=dict)

    def register(self, association: AssociationDescriptor) -> None:
        self.by_table.setdefault(association.table, []).append(association)

    def for_table(self, table_name: str) -> List[AssociationDescriptor]:
        """Get the associations exposed by a table (empty if none)."""
        return list(self.by_table.get(table_name, []))


def join_pivot_partners(rows: Sequence[ForeignKeyRow]) -> List[ForeignKeyRow]:
    """Pair up foreign keys that share a primary-key constraint.

    Self-join of the foreign-key rows on the primary-key constraint of the
    owning column, excluding the row's own constraint. A row is emitted once
    per partner with ``other_table``/``other_column`` filled in; rows without
    partners are kept unchanged. Rows that already name a partner pass
    through as-is.
    """
    joined = []
    for row in rows:
        if row.other_table or not row.primary_key:
            joined.append(row)
            continue

        partners = [
            other for other in rows
            if other.primary_key == row.primary_key
            and other.table_name == row.table_name
            and other.constraint_name != row.constraint_name
        ]
        if not partners:
            joined.append(row)
            continue

        for partner in partners:
            joined.append(replace(
                row,
                other_table=partner.reference_table,
                other_column=partner.column_name,
            ))
    return joined


def resolve_associations(rows: Iterable[ForeignKeyRow]) -> AssociationIndex:
    """Resolve every foreign-key row of a schema into associations.

    Args:
        rows: Foreign-key rows, optionally already carrying pivot partners

    Returns:
        AssociationIndex with the relation statements and per-table lookup
    """
    index = AssociationIndex()

    for row in join_pivot_partners(list(rows)):
        logger.info("%s", row.description)

        if row.other_table:
            # Pivot: the referenced table and the partner's referenced table
            # each get a belongs-to-many through the owning table.
            relation = AssociationDescriptor(
                kind=AssociationKind.BELONGS_TO_MANY,
                table=row.reference_table,
                target_table=row.other_table,
                foreign_key=row.column_name,
                through=row.table_name,
                comment=row.description,
            )
            mirror = AssociationDescriptor(
                kind=AssociationKind.BELONGS_TO_MANY,
                table=row.other_table,
                target_table=row.reference_table,
                foreign_key=row.other_column or row.column_name,
                through=row.table_name,
                comment=row.description,
            )
            index.relations.append(relation)
            index.register(mirror)
            index.register(relation)
        else:
            relation = AssociationDescriptor(
                kind=AssociationKind.BELONGS_TO,
                table=row.table_name,
                target_table=row.reference_table,
                foreign_key=row.column_name,
                alias=to_camel_case(row.reference_table),
                comment=row.description,
            )
            index.relations.append(relation)
            index.register(relation)

    return index
