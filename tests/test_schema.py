"""Tests for schema plan construction and CREATE TABLE rendering."""

from __future__ import annotations

import pytest

from mkutil.errors import NoPrimaryKey, SchemaPreconditionError
from mkutil.field_spec import parse
from mkutil.models import SchemaColumn, SchemaPlan, quote_identifier
from mkutil.schema import build_schema, create_table_sql


def _fields(spec: str):
    fields, _ = parse(spec)
    return fields


class TestBuildSchema:
    def test_primary_key_excluded_from_columns(self):
        plan = build_schema("person", _fields("id:hidden,name:text,age:number"))
        assert plan.primary_key == "id"
        assert plan.columns == [
            SchemaColumn(name="name", sql_type="VARCHAR(255)"),
            SchemaColumn(name="age", sql_type="INT"),
        ]

    def test_no_leading_hidden_field(self):
        with pytest.raises(NoPrimaryKey) as excinfo:
            build_schema("person", _fields("name:text"))
        assert excinfo.value.kind == "no_primary_key"
        assert isinstance(excinfo.value, SchemaPreconditionError)

    def test_hidden_field_not_first(self):
        with pytest.raises(NoPrimaryKey):
            build_schema("person", _fields("name:text,id:hidden"))

    def test_empty_fields(self):
        with pytest.raises(NoPrimaryKey):
            build_schema("person", [])

    def test_later_hidden_fields_are_plain_columns(self):
        plan = build_schema("person", _fields("id:hidden,token:hidden"))
        assert plan.columns == [SchemaColumn(name="token", sql_type="VARCHAR(255)")]

    def test_select_convention(self):
        plan = build_schema("product", _fields("id:hidden,category_id:select,category:select"))
        assert [c.sql_type for c in plan.columns] == ["INT", "VARCHAR(255)"]


class TestSql:
    def test_create_table_statement(self):
        sql = create_table_sql("person", _fields("id:hidden,name:text,age:number"))
        assert sql == (
            "CREATE TABLE IF NOT EXISTS `person` (\n"
            "    `id` INT AUTO_INCREMENT PRIMARY KEY,\n"
            "    `name` VARCHAR(255),\n"
            "    `age` INT\n"
            ");"
        )

    def test_key_only_table(self):
        plan = SchemaPlan(table_name="t", primary_key="id", columns=[])
        assert plan.to_sql() == "CREATE TABLE IF NOT EXISTS `t` (\n    `id` INT AUTO_INCREMENT PRIMARY KEY\n);"

    def test_reserved_words_quoted(self):
        sql = create_table_sql("order", _fields("id:hidden,select:text,group:number"))
        assert "`order`" in sql
        assert "`select` VARCHAR(255)" in sql
        assert "`group` INT" in sql

    def test_backticks_escaped(self):
        assert quote_identifier("we`ird") == "`we``ird`"
