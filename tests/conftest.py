"""Shared pytest fixtures for sequelize-pg-generator tests."""

import pytest
from typing import Dict, List, Optional

from sequelize_pg_generator.database import (
    CatalogColumnRow,
    CatalogIntrospector,
    ForeignKeyRow,
    FOREIGN_KEY,
    PRIMARY_KEY,
)


def column(name: str, data_type: str, **kwargs) -> CatalogColumnRow:
    """Build a catalog column row with sensible defaults."""
    return CatalogColumnRow(name=name, data_type=data_type, **kwargs)


def serial_id() -> CatalogColumnRow:
    return column(
        "id", "integer",
        ordinal_position=1,
        column_default="nextval('id_seq'::regclass)",
        is_nullable=False,
        keys=(PRIMARY_KEY,),
    )


def foreign_key(
    table: str,
    col: str,
    reference_table: str,
    primary_key: Optional[str] = None,
) -> ForeignKeyRow:
    return ForeignKeyRow(
        constraint_name=f"{table}_{col}_fkey",
        table_name=table,
        column_name=col,
        reference_table=reference_table,
        reference_column="id",
        primary_key=primary_key,
    )


class FakeIntrospector(CatalogIntrospector):
    """In-memory introspector that records the calls made against it."""

    def __init__(
        self,
        columns: Dict[str, List[CatalogColumnRow]],
        foreign_keys: List[ForeignKeyRow],
    ):
        self.columns = columns
        self.foreign_keys = foreign_keys
        self.calls: List[str] = []
        self.connected = False

    def connect(self):
        self.connected = True
        self.calls.append("connect")

    def close(self):
        self.connected = False
        self.calls.append("close")

    def get_tables(self) -> List[str]:
        self.calls.append("get_tables")
        return list(self.columns)

    def get_columns(self, table: str) -> List[CatalogColumnRow]:
        self.calls.append(f"get_columns:{table}")
        return list(self.columns[table])

    def get_foreign_keys(self) -> List[ForeignKeyRow]:
        self.calls.append("get_foreign_keys")
        return list(self.foreign_keys)


@pytest.fixture
def blog_columns():
    """Columns of a small blog schema: author, category, post, post_tag, tag."""
    return {
        "author": [
            serial_id(),
            column("name", "character varying", ordinal_position=2, is_nullable=False, character_maximum_length=100),
        ],
        "category": [
            serial_id(),
            column("name", "character varying", ordinal_position=2, is_nullable=False, character_maximum_length=255),
        ],
        "post": [
            serial_id(),
            column("title", "character varying", ordinal_position=2, is_nullable=False, character_maximum_length=255),
            column("body", "text", ordinal_position=3),
            column(
                "status", "USER-DEFINED",
                ordinal_position=4,
                column_default="'draft'::post_status",
                is_nullable=False,
                udt_name="post_status",
                enum_values=("draft", "published"),
            ),
            column("published", "boolean", ordinal_position=5, column_default="false", is_nullable=False),
            column("metadata", "jsonb", ordinal_position=6, column_default="'{}'::jsonb"),
            column("created_at", "timestamp with time zone", ordinal_position=7, column_default="now()"),
            column("category_id", "integer", ordinal_position=8, keys=(FOREIGN_KEY,)),
            column("author_id", "integer", ordinal_position=9, keys=(FOREIGN_KEY,)),
        ],
        "post_tag": [
            column("post_id", "integer", ordinal_position=1, is_nullable=False, keys=(FOREIGN_KEY, PRIMARY_KEY)),
            column("tag_id", "integer", ordinal_position=2, is_nullable=False, keys=(FOREIGN_KEY, PRIMARY_KEY)),
        ],
        "tag": [
            serial_id(),
            column("label", "character varying", ordinal_position=2, is_nullable=False, character_maximum_length=50),
        ],
    }


@pytest.fixture
def blog_foreign_keys():
    """Foreign keys of the blog schema; post_tag is a pivot between post and tag."""
    return [
        foreign_key("post", "author_id", "author"),
        foreign_key("post", "category_id", "category"),
        foreign_key("post_tag", "post_id", "post", primary_key="post_tag_pkey"),
        foreign_key("post_tag", "tag_id", "tag", primary_key="post_tag_pkey"),
    ]


@pytest.fixture
def blog_introspector(blog_columns, blog_foreign_keys):
    """Fake introspector serving the blog schema."""
    return FakeIntrospector(blog_columns, blog_foreign_keys)


@pytest.fixture
def make_introspector():
    """Factory for fake introspectors over arbitrary schemas."""
    return FakeIntrospector


@pytest.fixture
def make_column():
    """Factory for catalog column rows."""
    return column


@pytest.fixture
def make_foreign_key():
    """Factory for foreign-key rows referencing ``<table>.id``."""
    return foreign_key
