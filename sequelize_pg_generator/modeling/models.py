"""Descriptor models produced by the schema-to-model transformation."""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from ..naming import model_name


class StorageTag(str, Enum):
    """Sequelize data types a column can be stored as."""
    INTEGER = "INTEGER"
    DOUBLE = "DOUBLE"
    STRING = "STRING"
    CHAR = "CHAR"
    DATEONLY = "DATEONLY"
    DATE = "DATE"
    JSONB = "JSONB"
    JSON = "JSON"
    BOOLEAN = "BOOLEAN"
    ENUM = "ENUM"
    TEXT = "TEXT"
    ARRAY = "ARRAY"


class ScalarKind(str, Enum):
    """Type category exposed to generated code."""
    NUMBER = "number"
    STRING = "string"
    DATE = "Date"
    OBJECT = "object"
    BOOLEAN = "boolean"
    ARRAY = "array"


_DOC_TYPES = {
    ScalarKind.NUMBER: "number",
    ScalarKind.STRING: "string",
    ScalarKind.DATE: "Date",
    ScalarKind.OBJECT: "Object",
    ScalarKind.BOOLEAN: "boolean",
    ScalarKind.ARRAY: "Array",
}

_TS_TYPES = {
    ScalarKind.NUMBER: "number",
    ScalarKind.STRING: "string",
    ScalarKind.DATE: "Date",
    ScalarKind.OBJECT: "any",
    ScalarKind.BOOLEAN: "boolean",
}


@dataclass(frozen=True)
class StorageType:
    """A storage tag plus its parameter (size, enum labels or array element)."""
    tag: StorageTag
    size: Optional[int] = None
    labels: Tuple[str, ...] = ()
    element: Optional["StorageType"] = None

    def render(self) -> str:
        """Render as the expression following ``DataTypes.``."""
        if self.tag in (StorageTag.STRING, StorageTag.CHAR):
            size = self.size if self.size else "null"
            return f"{self.tag.value}({size})"
        if self.tag is StorageTag.ENUM:
            quoted = ", ".join(f"'{label}'" for label in self.labels)
            return f"ENUM({quoted})"
        if self.tag is StorageTag.ARRAY:
            return f"ARRAY(DataTypes.{self.element.render()})"
        return self.tag.value


@dataclass(frozen=True)
class ColumnType:
    """Normalized classification of a catalog data type."""
    storage: StorageType
    scalar_kind: ScalarKind
    comment: Optional[str] = None
    element_kind: Optional[ScalarKind] = None
    # Underlying user type for enums, array type for arrays
    type_name: Optional[str] = None

    @property
    def doc_type(self) -> str:
        return _DOC_TYPES[self.scalar_kind]

    @property
    def ts_type(self) -> str:
        if self.scalar_kind is ScalarKind.ARRAY:
            return f"{_TS_TYPES[self.element_kind]}[]"
        return _TS_TYPES[self.scalar_kind]


class DefaultKind(str, Enum):
    NONE = "none"
    LITERAL = "literal"
    JSON = "json"
    CURRENT_TIMESTAMP = "current_timestamp"
    AUTO_INCREMENT = "auto_increment"
    EMPTY_ARRAY = "empty_array"


@dataclass(frozen=True)
class DefaultValue:
    """Resolved column default: a literal, raw JSON text or a sentinel."""
    kind: DefaultKind = DefaultKind.NONE
    value: Any = None

    @classmethod
    def none(cls) -> "DefaultValue":
        return cls()

    @classmethod
    def literal(cls, value: Any) -> "DefaultValue":
        return cls(DefaultKind.LITERAL, value)

    @classmethod
    def json(cls, text: str) -> "DefaultValue":
        return cls(DefaultKind.JSON, text)

    @classmethod
    def current_timestamp(cls) -> "DefaultValue":
        return cls(DefaultKind.CURRENT_TIMESTAMP)

    @classmethod
    def auto_increment(cls) -> "DefaultValue":
        return cls(DefaultKind.AUTO_INCREMENT)

    @classmethod
    def empty_array(cls) -> "DefaultValue":
        return cls(DefaultKind.EMPTY_ARRAY)

    @property
    def is_auto_increment(self) -> bool:
        return self.kind is DefaultKind.AUTO_INCREMENT

    @property
    def has_value(self) -> bool:
        """True when the column gets a ``defaultValue`` in generated code."""
        return self.kind not in (DefaultKind.NONE, DefaultKind.AUTO_INCREMENT)

    def render(self) -> Optional[str]:
        """Render as a JavaScript expression, or None when there is no value."""
        if self.kind is DefaultKind.LITERAL:
            return json.dumps(self.value)
        if self.kind is DefaultKind.JSON:
            return self.value
        if self.kind is DefaultKind.CURRENT_TIMESTAMP:
            return "DataTypes.NOW"
        if self.kind is DefaultKind.EMPTY_ARRAY:
            return "[]"
        return None


@dataclass(frozen=True)
class ColumnDescriptor:
    """A model attribute derived from one catalog column."""
    name: str
    field: str
    column_type: ColumnType
    type_comment: str
    is_primary_key: bool = False
    is_foreign_key: bool = False
    allow_null: bool = True
    default: DefaultValue = DefaultValue()

    @property
    def auto_increment(self) -> bool:
        return self.default.is_auto_increment

    @property
    def default_value(self) -> Optional[str]:
        return self.default.render()


class AssociationKind(str, Enum):
    BELONGS_TO = "belongs_to"
    BELONGS_TO_MANY = "belongs_to_many"


@dataclass(frozen=True)
class AssociationDescriptor:
    """A relation from ``table`` to ``target_table``.

    Many-to-many relations name the pivot table they go through.
    """
    kind: AssociationKind
    table: str
    target_table: str
    foreign_key: str
    alias: Optional[str] = None
    through: Optional[str] = None
    comment: Optional[str] = None

    @property
    def many_to_many(self) -> bool:
        return self.kind is AssociationKind.BELONGS_TO_MANY

    @property
    def model(self) -> str:
        return model_name(self.table)

    @property
    def target_model(self) -> str:
        return model_name(self.target_table)

    @property
    def through_model(self) -> Optional[str]:
        return model_name(self.through) if self.through else None


@dataclass(frozen=True)
class ModelDescriptor:
    """Everything the emitter needs to render one table's model."""
    table_name: str
    class_name: str
    columns: Tuple[ColumnDescriptor, ...] = ()
    associations: Tuple[AssociationDescriptor, ...] = ()

    @property
    def has_many_to_many(self) -> bool:
        return any(assoc.many_to_many for assoc in self.associations)
