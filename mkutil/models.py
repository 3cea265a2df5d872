from typing import Dict, List, Literal, Optional, Tuple, get_args

from pydantic import BaseModel, ConfigDict, Field


FieldType = Literal[
    "text",
    "number",
    "password",
    "email",
    "date",
    "time",
    "datetime-local",
    "select",
    "textarea",
    "checkbox",
    "switch",
    "radio",
    "hidden",
    "file",
]
FIELD_TYPES: Tuple[str, ...] = get_args(FieldType)

UiFragmentKind = Literal["hidden", "select", "textarea", "checkbox", "standard_input"]
WarningKind = Literal["malformed_field", "missing_type", "unknown_type"]
ResolutionSource = Literal["explicit", "exact", "prefix"]
Layout = Literal["controller", "modules"]


def humanize(name: str) -> str:
    """``user_profile`` -> ``User Profile``."""
    return " ".join(word[:1].upper() + word[1:] for word in name.replace("_", " ").split(" "))


class FieldDescriptor(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    type: FieldType = "text"

    @property
    def label(self) -> str:
        return humanize(self.name)


class FieldWarning(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: WarningKind
    entry: str
    message: str


class DefaultEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    key: str = Field(..., min_length=1)
    spec: str


class DefaultsLibrary(BaseModel):
    """Canned field specs keyed by artifact-name prefix.

    Entries keep the order they were loaded in; prefix resolution picks the
    first matching key, so reordering entries changes behaviour.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    entries: List[DefaultEntry] = Field(default_factory=list)

    @classmethod
    def from_pairs(cls, pairs) -> "DefaultsLibrary":
        if isinstance(pairs, dict):
            pairs = pairs.items()
        return cls(entries=[DefaultEntry(key=key, spec=spec) for key, spec in pairs])

    def keys(self) -> List[str]:
        return [entry.key for entry in self.entries]

    def get(self, key: str) -> Optional[str]:
        for entry in self.entries:
            if entry.key == key:
                return entry.spec
        return None

    def __len__(self) -> int:
        return len(self.entries)


class ResolvedSpec(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    spec: str
    source: ResolutionSource
    matched_key: Optional[str] = None


class NotFound(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    artifact_name: str
    available_keys: List[str]


class RenderContext(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    page_name: str
    title: str
    page_info: str
    columns: List[str]
    table_headers: str
    form_fields: str

    def replacements(self) -> Dict[str, str]:
        return {
            "{{PAGE_NAME}}": self.page_name,
            "{{PAGE_INFO}}": self.page_info,
            "{{TITLE}}": self.title,
            "{{TABLE_HEADERS}}": self.table_headers,
            "{{FORM_FIELDS}}": self.form_fields,
        }


class SchemaColumn(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    sql_type: str


class SchemaPlan(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    table_name: str = Field(..., min_length=1)
    primary_key: str = Field(..., min_length=1)
    columns: List[SchemaColumn]

    def to_sql(self) -> str:
        lines = [f"    {quote_identifier(self.primary_key)} INT AUTO_INCREMENT PRIMARY KEY"]
        lines.extend(f"    {quote_identifier(column.name)} {column.sql_type}" for column in self.columns)
        body = ",\n".join(lines)
        return f"CREATE TABLE IF NOT EXISTS {quote_identifier(self.table_name)} (\n{body}\n);"


def quote_identifier(name: str) -> str:
    return "`" + name.replace("`", "``") + "`"
