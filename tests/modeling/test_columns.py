"""Tests for building column descriptors from catalog rows."""

import pytest

from sequelize_pg_generator.database import FOREIGN_KEY, PRIMARY_KEY
from sequelize_pg_generator.errors import UnrecognizedTypeError
from sequelize_pg_generator.modeling import DefaultKind, build_column, build_columns


class TestBuildColumn:
    """Tests for build_column."""

    def test_serial_primary_key(self, make_column):
        """Test a serial id becomes an auto-increment primary key."""
        row = make_column(
            "id", "integer",
            column_default="nextval('post_id_seq'::regclass)",
            is_nullable=False,
            keys=(PRIMARY_KEY,),
        )

        col = build_column(row)

        assert col.name == "id"
        assert col.field == "id"
        assert col.is_primary_key
        assert not col.allow_null
        assert col.auto_increment
        assert col.default_value is None
        assert col.type_comment == "integer"

    def test_foreign_key_excluded_by_default(self, make_column):
        """Test foreign key columns are dropped unless requested."""
        row = make_column("category_id", "integer", keys=(FOREIGN_KEY,))

        assert build_column(row) is None

    def test_foreign_key_included(self, make_column):
        """Test foreign key columns are kept with include_foreign_keys."""
        row = make_column("category_id", "integer", keys=(FOREIGN_KEY,))

        col = build_column(row, include_foreign_keys=True)

        assert col is not None
        assert col.is_foreign_key
        assert not col.is_primary_key

    def test_camel_case_keeps_field(self, make_column):
        """Test camel casing renames the attribute but not the field."""
        row = make_column("created_at", "timestamp with time zone", column_default="now()")

        col = build_column(row, camel_case=True)

        assert col.name == "createdAt"
        assert col.field == "created_at"
        assert col.default.kind is DefaultKind.CURRENT_TIMESTAMP

    def test_enum_comment(self, make_column):
        """Test the type comment of an enum names the user type."""
        row = make_column(
            "status", "USER-DEFINED",
            column_default="'draft'::post_status",
            udt_name="post_status",
            enum_values=("draft", "published"),
        )

        col = build_column(row)

        assert col.type_comment == "user defined type: post_status"
        assert col.default_value == '"draft"'

    def test_nullable(self, make_column):
        """Test nullability is carried over."""
        assert build_column(make_column("body", "text")).allow_null

    def test_unrecognized_type(self, make_column):
        """Test an unsupported type aborts column building."""
        with pytest.raises(UnrecognizedTypeError):
            build_column(make_column("price", "money"))


class TestBuildColumns:
    """Tests for build_columns."""

    def test_order_and_filtering(self, blog_columns):
        """Test catalog order is kept and foreign keys are dropped."""
        columns = build_columns(blog_columns["post"])

        assert [col.name for col in columns] == [
            "id", "title", "body", "status", "published", "metadata", "created_at",
        ]

    def test_include_foreign_keys(self, blog_columns):
        """Test every column is kept when foreign keys are included."""
        columns = build_columns(blog_columns["post"], include_foreign_keys=True)

        assert len(columns) == len(blog_columns["post"])
        assert columns[-1].name == "author_id"

    def test_pivot_without_foreign_keys_is_empty(self, blog_columns):
        """Test a pivot table made only of foreign keys has no attributes."""
        assert build_columns(blog_columns["post_tag"]) == []
