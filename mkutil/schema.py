from typing import Sequence

from .errors import NoPrimaryKey
from .models import FieldDescriptor, SchemaColumn, SchemaPlan
from .type_mapping import is_primary_key_candidate, to_sql_type


def build_schema(table_name: str, fields: Sequence[FieldDescriptor]) -> SchemaPlan:
    """Turn parsed fields into a single-table plan.

    The first field must be ``hidden``; it becomes an auto-incrementing
    integer key whatever its declared type, and is not repeated as an
    ordinary column. Raises :class:`NoPrimaryKey` otherwise.
    """
    if not fields or not is_primary_key_candidate(0, fields[0].type):
        raise NoPrimaryKey(table_name)

    primary, *rest = fields
    columns = [SchemaColumn(name=field.name, sql_type=to_sql_type(field.name, field.type)) for field in rest]
    return SchemaPlan(table_name=table_name, primary_key=primary.name, columns=columns)


def create_table_sql(table_name: str, fields: Sequence[FieldDescriptor]) -> str:
    return build_schema(table_name, fields).to_sql()
