"""Shared fixtures: a small ordered defaults library and a throwaway stubs directory."""

from __future__ import annotations

from pathlib import Path

import pytest

from mkutil.models import DefaultsLibrary


STUBS = {
    "main.stub": "<h2>{{TITLE}}</h2>\n<tr>\n{{TABLE_HEADERS}}</tr>\n<form>{{FORM_FIELDS}}\n</form>\n",
    "fetch.stub": "<?php // fetch {{PAGE_NAME}} ({{PAGE_INFO}})\n",
    "post.stub": "<?php // post {{PAGE_NAME}} {{UNKNOWN}}\n",
    "js.stub": "$('#{{PAGE_NAME}}_table');\n",
}


@pytest.fixture
def library() -> DefaultsLibrary:
    return DefaultsLibrary.from_pairs(
        [
            ("user", "a:text"),
            ("user_profile", "b:number"),
            ("product", "id:hidden,name:text,category_id:select,price:number"),
        ]
    )


@pytest.fixture
def stubs_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "stubs"
    directory.mkdir()
    for name, content in STUBS.items():
        (directory / name).write_text(content, encoding="utf-8")
    (directory / "defaults.json").write_text(
        '{"user": "id:hidden,username:text,email:email", "product": "id:hidden,name:text"}',
        encoding="utf-8",
    )
    return directory


@pytest.fixture
def templates(stubs_dir: Path) -> dict[str, str]:
    return {path.stem: path.read_text(encoding="utf-8") for path in stubs_dir.glob("*.stub")}


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "MKUTIL_STUBS_DIR",
        "MKUTIL_DEFAULTS_PATH",
        "MKUTIL_OUTPUT_DIR",
        "MKUTIL_LAYOUT",
        "MKUTIL_DATABASE_URL",
    ):
        monkeypatch.delenv(var, raising=False)
