"""Schema-to-model transformation.

Turns catalog rows into column, association and model descriptors without
touching the database or the file system.
"""

from .models import (
    AssociationDescriptor,
    AssociationKind,
    ColumnDescriptor,
    ColumnType,
    DefaultKind,
    DefaultValue,
    ModelDescriptor,
    ScalarKind,
    StorageTag,
    StorageType,
)
from .type_classifier import SUPPORTED_TYPES, classify_column, classify_type
from .defaults import resolve_default
from .columns import build_column, build_columns
from .associations import AssociationIndex, join_pivot_partners, resolve_associations
from .assembler import assemble_model, assemble_models, dedupe_associations

__all__ = [
    # Descriptors
    "AssociationDescriptor",
    "AssociationKind",
    "ColumnDescriptor",
    "ColumnType",
    "DefaultKind",
    "DefaultValue",
    "ModelDescriptor",
    "ScalarKind",
    "StorageTag",
    "StorageType",
    # Transformation steps
    "SUPPORTED_TYPES",
    "classify_column",
    "classify_type",
    "resolve_default",
    "build_column",
    "build_columns",
    "AssociationIndex",
    "join_pivot_partners",
    "resolve_associations",
    "assemble_model",
    "assemble_models",
    "dedupe_associations",
]
