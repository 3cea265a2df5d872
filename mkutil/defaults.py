import json
import logging
from pathlib import Path
from typing import Union

from .errors import ConfigurationError
from .models import DefaultsLibrary, NotFound, ResolvedSpec

logger = logging.getLogger(__name__)

DEFAULTS_PATH = Path(__file__).parent / "stubs" / "defaults.json"


def load_defaults(path: Path = DEFAULTS_PATH) -> DefaultsLibrary:
    if not path.exists():
        raise ConfigurationError(f"Missing config file: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}") from exc

    try:
        # object_pairs_hook keeps the file's key order, which prefix matching depends on
        pairs = json.loads(raw, object_pairs_hook=list)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(pairs, list) or not all(isinstance(pair, tuple) for pair in pairs):
        raise ConfigurationError(
            f"Invalid format in {path}. Ensure it is a proper key-value object."
        )

    bad_keys = [key for key, value in pairs if not isinstance(value, str) or not key]
    if bad_keys:
        raise ConfigurationError(
            f"Invalid entries in {path}: every key must map to a field spec string ({', '.join(map(repr, bad_keys))})"
        )

    library = DefaultsLibrary.from_pairs(pairs)
    logger.debug("Loaded %d default utilities from %s", len(library), path)
    return library


def resolve(artifact_name: str, library: DefaultsLibrary, explicit_spec: str = "") -> Union[ResolvedSpec, NotFound]:
    """Pick the field spec to render for *artifact_name*.

    An explicit spec always wins. Otherwise an exact, case-sensitive key
    match is tried before falling back to the first key (in load order)
    that *artifact_name* starts with, ignoring case. Exact-first lets a
    library hold both ``user`` and ``user_profile`` without the longer key
    being shadowed.
    """
    if explicit_spec and explicit_spec.strip():
        return ResolvedSpec(spec=explicit_spec, source="explicit")

    exact = library.get(artifact_name)
    if exact is not None:
        return ResolvedSpec(spec=exact, source="exact", matched_key=artifact_name)

    lowered = artifact_name.lower()
    for entry in library.entries:
        if lowered.startswith(entry.key.lower()):
            return ResolvedSpec(spec=entry.spec, source="prefix", matched_key=entry.key)

    return NotFound(artifact_name=artifact_name, available_keys=library.keys())
