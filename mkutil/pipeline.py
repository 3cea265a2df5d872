import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .artifacts import save_artifacts
from .database import execute_statement
from .defaults import resolve
from .errors import ExecutionError, SchemaPreconditionError, UserInputError
from .field_spec import parse
from .models import (
    DefaultsLibrary,
    FieldDescriptor,
    FieldWarning,
    Layout,
    NotFound,
    RenderContext,
    ResolvedSpec,
    SchemaPlan,
)
from .renderer import render, render_artifacts
from .schema import build_schema

logger = logging.getLogger(__name__)

PAGE_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")


class NoMatchingDefaults(UserInputError):
    def __init__(self, not_found: NotFound):
        super().__init__(
            f"No fields provided and '{not_found.artifact_name}' doesn't match any known utility type."
        )
        self.available_keys = not_found.available_keys


@dataclass(frozen=True)
class GenerationResult:
    page_name: str
    resolved: ResolvedSpec
    fields: List[FieldDescriptor]
    warnings: List[FieldWarning]
    context: RenderContext
    rendered: Dict[str, str]
    schema: Optional[SchemaPlan] = None
    schema_error: Optional[SchemaPreconditionError] = None


@dataclass(frozen=True)
class RunResult:
    generation: GenerationResult
    written: List[Path] = field(default_factory=list)
    migrated: bool = False
    migration_error: Optional[ExecutionError] = None


def validate_page_name(page_name: str) -> str:
    if not page_name or not page_name.strip():
        raise UserInputError("A page name is required.")
    if not PAGE_NAME_PATTERN.fullmatch(page_name):
        raise UserInputError(
            f"Invalid page name '{page_name}': use letters, digits and underscores only."
        )
    return page_name


def resolve_fields(
    page_name: str,
    field_spec: str,
    library: DefaultsLibrary,
    *,
    use_defaults: bool = True,
) -> ResolvedSpec:
    if not use_defaults and not (field_spec or "").strip():
        raise UserInputError("No fields provided and the defaults library is disabled.")

    resolution = resolve(page_name, library, field_spec)
    if isinstance(resolution, NotFound):
        raise NoMatchingDefaults(resolution)
    return resolution


def generate(
    page_name: str,
    field_spec: str,
    *,
    library: DefaultsLibrary,
    templates: Dict[str, str],
    use_defaults: bool = True,
    with_schema: bool = False,
) -> GenerationResult:
    """Resolve, parse and render one page without touching the filesystem.

    When *with_schema* is set a schema precondition failure is recorded on
    the result instead of raised, since the rendered artifacts are still
    usable.
    """
    validate_page_name(page_name)
    resolved = resolve_fields(page_name, field_spec, library, use_defaults=use_defaults)
    if resolved.source != "explicit":
        logger.info("Using default fields from '%s' for '%s'", resolved.matched_key, page_name)

    fields, warnings = parse(resolved.spec)
    if not fields:
        raise UserInputError(f"No usable field definitions in '{resolved.spec}'.")

    context = render(page_name, fields)
    rendered = render_artifacts(context, templates)

    schema: Optional[SchemaPlan] = None
    schema_error: Optional[SchemaPreconditionError] = None
    if with_schema:
        try:
            schema = build_schema(page_name, fields)
        except SchemaPreconditionError as exc:
            logger.debug("%s", exc)
            schema_error = exc

    return GenerationResult(
        page_name=page_name,
        resolved=resolved,
        fields=fields,
        warnings=warnings,
        context=context,
        rendered=rendered,
        schema=schema,
        schema_error=schema_error,
    )


def run(
    page_name: str,
    field_spec: str,
    *,
    library: DefaultsLibrary,
    templates: Dict[str, str],
    output_dir: Path,
    layout: Layout = "controller",
    use_defaults: bool = True,
    migrate: bool = False,
    database_url: Optional[str] = None,
    engine: Any | None = None,
) -> RunResult:
    """Generate, write the artifacts, then optionally create the table.

    Artifacts are written before the migration runs and stay in place if it
    fails; the failure is returned on the result.
    """
    generation = generate(
        page_name,
        field_spec,
        library=library,
        templates=templates,
        use_defaults=use_defaults,
        with_schema=migrate,
    )
    written = save_artifacts(page_name, generation.rendered, output_dir, layout)

    if not migrate:
        return RunResult(generation=generation, written=written)
    if generation.schema is None:
        return RunResult(generation=generation, written=written, migrated=False)

    try:
        execute_statement(generation.schema.to_sql(), engine=engine, database_url=database_url)
    except ExecutionError as exc:
        logger.debug("Migration for '%s' failed: %s", page_name, exc.cause)
        return RunResult(generation=generation, written=written, migration_error=exc)
    return RunResult(generation=generation, written=written, migrated=True)
