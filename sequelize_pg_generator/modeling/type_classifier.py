"""Classification of PostgreSQL catalog data types into Sequelize types."""

import re
from typing import Callable, Dict, Iterable, Optional

from ..errors import UnrecognizedTypeError
from .models import ColumnType, ScalarKind, StorageTag, StorageType

_ARRAY_MARKER = re.compile(r"\[\]$")


def _simple(tag: StorageTag, kind: ScalarKind) -> Callable[..., ColumnType]:
    def build(**_) -> ColumnType:
        return ColumnType(storage=StorageType(tag), scalar_kind=kind)
    return build


def _sized(tag: StorageTag) -> Callable[..., ColumnType]:
    def build(character_maximum_length: Optional[int] = None, **_) -> ColumnType:
        return ColumnType(
            storage=StorageType(tag, size=character_maximum_length),
            scalar_kind=ScalarKind.STRING,
        )
    return build


def _enum(udt_name: Optional[str] = None, enum_values: Iterable[str] = (), **_) -> ColumnType:
    labels = tuple(enum_values)
    # Only enums carry labels; other user types (citext, hstore, ...) have no mapping.
    if not labels:
        raise UnrecognizedTypeError(udt_name or "USER-DEFINED")
    return ColumnType(
        storage=StorageType(StorageTag.ENUM, labels=labels),
        scalar_kind=ScalarKind.STRING,
        comment=f"user defined type: {udt_name}",
        type_name=udt_name,
    )


def _array(udt_name: Optional[str] = None, **_) -> ColumnType:
    element_type = _ARRAY_MARKER.sub("", udt_name or "")
    element = classify_type(element_type)
    return ColumnType(
        storage=StorageType(StorageTag.ARRAY, element=element.storage),
        scalar_kind=ScalarKind.ARRAY,
        comment=udt_name,
        element_kind=element.scalar_kind,
        type_name=udt_name,
    )


# Raw information_schema.columns.data_type -> builder
TYPE_BUILDERS: Dict[str, Callable[..., ColumnType]] = {
    "integer": _simple(StorageTag.INTEGER, ScalarKind.NUMBER),
    "smallint": _simple(StorageTag.INTEGER, ScalarKind.NUMBER),
    "numeric": _simple(StorageTag.DOUBLE, ScalarKind.NUMBER),
    "character varying": _sized(StorageTag.STRING),
    "character": _sized(StorageTag.CHAR),
    "date": _simple(StorageTag.DATEONLY, ScalarKind.DATE),
    "timestamp with time zone": _simple(StorageTag.DATE, ScalarKind.DATE),
    "jsonb": _simple(StorageTag.JSONB, ScalarKind.OBJECT),
    "json": _simple(StorageTag.JSON, ScalarKind.OBJECT),
    "boolean": _simple(StorageTag.BOOLEAN, ScalarKind.BOOLEAN),
    "USER-DEFINED": _enum,
    "text": _simple(StorageTag.TEXT, ScalarKind.STRING),
    "ARRAY": _array,
}

SUPPORTED_TYPES = frozenset(TYPE_BUILDERS)


def classify_type(
    data_type: Optional[str],
    character_maximum_length: Optional[int] = None,
    udt_name: Optional[str] = None,
    enum_values: Iterable[str] = (),
) -> ColumnType:
    """Classify a raw SQL type name.

    Args:
        data_type: ``information_schema.columns.data_type``
        character_maximum_length: Size for character types
        udt_name: Underlying type name; the element type for arrays
            (``integer[]``) and the user type for enums
        enum_values: Enum labels for ``USER-DEFINED`` types

    Raises:
        UnrecognizedTypeError: If the type has no mapping
    """
    builder = TYPE_BUILDERS.get(data_type)
    if builder is None:
        raise UnrecognizedTypeError(data_type)
    return builder(
        character_maximum_length=character_maximum_length,
        udt_name=udt_name,
        enum_values=enum_values,
    )


def classify_column(row) -> ColumnType:
    """Classify the type of a CatalogColumnRow."""
    try:
        return classify_type(
            row.data_type,
            character_maximum_length=row.character_maximum_length,
            udt_name=row.udt_name,
            enum_values=row.enum_values,
        )
    except UnrecognizedTypeError as e:
        raise UnrecognizedTypeError(e.data_type, column=row.name) from None
