from typing import List, Tuple, cast

from .models import FIELD_TYPES, FieldDescriptor, FieldType, FieldWarning


def _split_segments(raw_spec: str) -> List[str]:
    return [segment for segment in (part.strip() for part in raw_spec.split(",")) if segment]


def parse(raw_spec: str) -> Tuple[List[FieldDescriptor], List[FieldWarning]]:
    """Parse ``name:type,name:type`` into ordered field descriptors.

    Problems with individual entries never raise: an entry with no name is
    dropped, a missing or unknown type falls back to ``text``, and each case
    adds one warning. Duplicate names are kept as given.
    """
    fields: List[FieldDescriptor] = []
    warnings: List[FieldWarning] = []

    for segment in _split_segments(raw_spec or ""):
        name, sep, type_token = segment.partition(":")
        name = name.strip()
        type_token = type_token.strip().lower()

        if not name:
            warnings.append(
                FieldWarning(
                    kind="malformed_field",
                    entry=segment,
                    message=f"Skipping malformed field definition: '{segment}'",
                )
            )
            continue

        if not sep or not type_token:
            warnings.append(
                FieldWarning(
                    kind="missing_type",
                    entry=segment,
                    message=f"Field '{segment}' has no type specified. Defaulting to 'text'.",
                )
            )
            type_token = "text"
        elif type_token not in FIELD_TYPES:
            warnings.append(
                FieldWarning(
                    kind="unknown_type",
                    entry=segment,
                    message=f"Field '{name}' has unknown type '{type_token}'. Defaulting to 'text'.",
                )
            )
            type_token = "text"

        fields.append(FieldDescriptor(name=name, type=cast(FieldType, type_token)))

    return fields, warnings
