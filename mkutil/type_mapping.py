"""Per-field-type mappings shared by the renderer and the schema generator."""

from .models import FieldType, UiFragmentKind

_UI_KINDS: dict[str, UiFragmentKind] = {
    "hidden": "hidden",
    "select": "select",
    "textarea": "textarea",
    "checkbox": "checkbox",
}

_SQL_TYPES: dict[str, str] = {
    "number": "INT",
    "date": "DATE",
    "time": "TIME",
    "datetime-local": "DATETIME",
    "checkbox": "VARCHAR(50)",
    "switch": "VARCHAR(50)",
    "radio": "VARCHAR(50)",
    "file": "LONGBLOB",
    "textarea": "TEXT",
}

DEFAULT_SQL_TYPE = "VARCHAR(255)"
FOREIGN_KEY_SUFFIX = "_id"


def to_ui_fragment_kind(field_type: FieldType) -> UiFragmentKind:
    """Everything without a dedicated widget renders as a plain ``<input>``
    whose ``type`` attribute is the field type itself."""
    return _UI_KINDS.get(field_type, "standard_input")


def to_sql_type(field_name: str, field_type: FieldType) -> str:
    # Naming convention: a select called ``<thing>_id`` stores a reference to
    # another table's integer key. Any other select stores the option text.
    if field_type == "select":
        return "INT" if field_name.endswith(FOREIGN_KEY_SUFFIX) else DEFAULT_SQL_TYPE
    return _SQL_TYPES.get(field_type, DEFAULT_SQL_TYPE)


def is_primary_key_candidate(index: int, field_type: FieldType) -> bool:
    return index == 0 and field_type == "hidden"
