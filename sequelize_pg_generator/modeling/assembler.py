"""Assembly of per-table model descriptors."""

from typing import Iterable, List, Mapping, Sequence

from ..naming import model_name
from .associations import AssociationIndex
from .models import AssociationDescriptor, ColumnDescriptor, ModelDescriptor


def dedupe_associations(associations: Iterable[AssociationDescriptor]) -> List[AssociationDescriptor]:
    """Keep the first association per target model."""
    seen = set()
    unique = []
    for assoc in associations:
        if assoc.target_model in seen:
            continue
        seen.add(assoc.target_model)
        unique.append(assoc)
    return unique


def assemble_model(
    table_name: str,
    columns: Sequence[ColumnDescriptor],
    index: AssociationIndex,
) -> ModelDescriptor:
    """Combine a table's columns and associations into a ModelDescriptor."""
    return ModelDescriptor(
        table_name=table_name,
        class_name=model_name(table_name),
        columns=tuple(columns),
        associations=tuple(dedupe_associations(index.for_table(table_name))),
    )


def assemble_models(
    tables: Sequence[str],
    columns_by_table: Mapping[str, Sequence[ColumnDescriptor]],
    index: AssociationIndex,
) -> List[ModelDescriptor]:
    """Assemble descriptors for tables in the given order."""
    return [
        assemble_model(table, columns_by_table.get(table, ()), index)
        for table in tables
    ]
