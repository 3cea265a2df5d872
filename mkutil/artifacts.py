import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Dict, List

from .errors import OutputError
from .models import Layout

logger = logging.getLogger(__name__)

LAYOUTS: Dict[str, Dict[str, str]] = {
    "controller": {
        "main": "{name}.php",
        "fetch": "fetch/fetch-{name}.php",
        "post": "controller/post-{name}.php",
        "js": "js/{name}.js",
    },
    "modules": {
        "main": "{name}.php",
        "fetch": "fetch/fetch_{name}.php",
        "post": "php/post_{name}.php",
        "js": "js/{name}.js",
    },
}


def artifact_paths(page_name: str, layout: Layout = "controller") -> Dict[str, Path]:
    return {stub: Path(pattern.format(name=page_name)) for stub, pattern in LAYOUTS[layout].items()}


def _atomic_write(path: Path, content: str) -> None:
    with NamedTemporaryFile("w", encoding="utf-8", dir=path.parent, delete=False) as tmp_file:
        tmp_file.write(content)
        tmp_path = Path(tmp_file.name)
    os.replace(tmp_path, path)


def save_artifacts(
    page_name: str,
    rendered: Dict[str, str],
    output_dir: Path,
    layout: Layout = "controller",
) -> List[Path]:
    paths = artifact_paths(page_name, layout)
    written: List[Path] = []

    for stub, content in rendered.items():
        if stub not in paths:
            raise OutputError(f"No output path for stub '{stub}' in layout '{layout}'")
        target = Path(output_dir) / paths[stub]
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            _atomic_write(target, content)
        except OSError as exc:
            raise OutputError(f"Failed to write {target}: {exc}") from exc
        logger.debug("Wrote %s (%d bytes)", target, len(content))
        written.append(target)

    return written
