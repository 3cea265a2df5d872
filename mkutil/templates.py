import logging
from pathlib import Path
from typing import Dict

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

REQUIRED_STUBS = ("main", "fetch", "post")
OPTIONAL_STUBS = ("js",)


def _stub_path(stubs_dir: Path, name: str) -> Path:
    return stubs_dir / f"{name}.stub"


def _read_stub(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Cannot read stub {path}: {exc}") from exc


def load_templates(stubs_dir: Path) -> Dict[str, str]:
    """Load the named stubs from *stubs_dir*.

    ``main``, ``fetch`` and ``post`` must exist. ``js`` is picked up when
    present, so a three-stub directory produces three artifacts.
    """
    templates: Dict[str, str] = {}
    for name in REQUIRED_STUBS:
        path = _stub_path(stubs_dir, name)
        if not path.exists():
            raise ConfigurationError(f"Stub file missing: {path}")
        templates[name] = _read_stub(path)

    for name in OPTIONAL_STUBS:
        path = _stub_path(stubs_dir, name)
        if path.exists():
            templates[name] = _read_stub(path)
        else:
            logger.debug("Optional stub %s not found, skipping", path)

    return templates
