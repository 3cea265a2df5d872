import logging
from pathlib import Path
from typing import Optional, cast

import typer
from rich import print
from rich.logging import RichHandler

from .config import Settings
from .defaults import load_defaults
from .errors import ConfigurationError, MkutilError, OutputError, UserInputError
from .models import DefaultsLibrary, FieldWarning, Layout
from .pipeline import GenerationResult, NoMatchingDefaults, generate as generate_page, run
from .templates import load_templates

app = typer.Typer(help="Scaffold listing pages, handlers and tables from a field spec.")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
):
    """mkutil CLI entrypoint."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit(code=0)


def _resolve_layout(layout: Optional[str]) -> Optional[Layout]:
    if layout is None:
        return None
    normalized_layout = layout.lower()
    if normalized_layout not in {"controller", "modules"}:
        print("[red]Invalid layout. Use 'controller' or 'modules'.[/red]")
        raise typer.Exit(code=2)
    return cast(Layout, normalized_layout)


def _load_settings(**overrides) -> Settings:
    try:
        return Settings.from_env(**overrides)
    except ConfigurationError as exc:
        print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)


def _load_library(settings: Settings) -> DefaultsLibrary:
    try:
        return load_defaults(settings.resolved_defaults_path)
    except ConfigurationError as exc:
        print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)


def _handle_error(exc: MkutilError) -> None:
    print(f"[red]{exc}[/red]")
    if isinstance(exc, NoMatchingDefaults):
        print("Available utility types (must start the name):")
        for key in exc.available_keys:
            print(f"  - {key}")
    raise typer.Exit(code=1)


def _print_warnings(warnings: list[FieldWarning]) -> None:
    for warning in warnings:
        print(f"[yellow]Warning: {warning.message}[/yellow]")


def _print_resolution(result: GenerationResult) -> None:
    resolved = result.resolved
    if resolved.source == "exact":
        print(f"Using default fields from '{resolved.matched_key}'")
    elif resolved.source == "prefix":
        print(f"Using default fields from '{resolved.matched_key}' (matched start of '{result.page_name}')")


@app.command("generate")
def generate(
    name: str = typer.Argument(..., help="Page name, e.g. user_profile."),
    fields: str = typer.Argument("", help="Field spec: 'name:type,name:type'."),
    defaults: bool = typer.Option(
        True,
        "--defaults/--no-defaults",
        help="Fall back to the defaults library when no fields are given.",
    ),
    migrate: bool = typer.Option(False, "--migrate", help="Create the table after writing the files."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print what would be written and stop."),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o", help="Where generated files go."),
    layout: Optional[str] = typer.Option(None, "--layout", help="Output layout: controller or modules."),
    stubs_dir: Optional[Path] = typer.Option(None, "--stubs", help="Directory holding the *.stub templates."),
    database_url: Optional[str] = typer.Option(None, "--database-url", help="SQLAlchemy URL used by --migrate."),
):
    settings = _load_settings(
        output_dir=output_dir,
        layout=_resolve_layout(layout),
        stubs_dir=stubs_dir,
        database_url=database_url,
    )
    if migrate and not dry_run and not settings.database_url:
        print("[red]--migrate needs a database URL (--database-url or MKUTIL_DATABASE_URL).[/red]")
        raise typer.Exit(code=1)

    library = _load_library(settings) if defaults else DefaultsLibrary()

    try:
        templates = load_templates(settings.stubs_dir)
        if dry_run:
            result = generate_page(
                name, fields, library=library, templates=templates, use_defaults=defaults, with_schema=migrate
            )
        else:
            outcome = run(
                name,
                fields,
                library=library,
                templates=templates,
                output_dir=settings.output_dir,
                layout=settings.layout,
                use_defaults=defaults,
                migrate=migrate,
                database_url=settings.database_url,
            )
            result = outcome.generation
    except (UserInputError, ConfigurationError, OutputError) as exc:
        _handle_error(exc)

    _print_resolution(result)
    _print_warnings(result.warnings)

    if result.schema_error is not None:
        print(f"[yellow]Skipping migration:[/yellow] {result.schema_error}")

    if dry_run:
        print(f"[bold]Dry run for '{name}'[/bold]")
        print(f"fields: {', '.join(f'{f.name}:{f.type}' for f in result.fields)}")
        print(f"artifacts: {', '.join(sorted(result.rendered))}")
        if result.schema is not None:
            print(result.schema.to_sql())
        return

    print("[green]Generated:[/green]")
    for path in outcome.written:
        print(f"  {path}")

    if outcome.migration_error is not None:
        print(f"[red]Migration failed:[/red] {outcome.migration_error.cause}")
        raise typer.Exit(code=1)
    if outcome.migrated:
        print(f"[green]Table '{name}' is ready.[/green]")
    print("You can now implement the logic in the generated files.")


@app.command("schema")
def schema(
    name: str = typer.Argument(..., help="Table (page) name."),
    fields: str = typer.Argument("", help="Field spec: 'name:type,name:type'."),
    defaults: bool = typer.Option(True, "--defaults/--no-defaults"),
):
    """Print the CREATE TABLE statement without writing anything."""
    settings = _load_settings()
    library = _load_library(settings) if defaults else DefaultsLibrary()

    try:
        result = generate_page(name, fields, library=library, templates={}, use_defaults=defaults, with_schema=True)
    except UserInputError as exc:
        _handle_error(exc)

    _print_warnings(result.warnings)
    if result.schema is None:
        print(f"[red]{result.schema_error}[/red]")
        raise typer.Exit(code=1)
    print(result.schema.to_sql())


@app.command("list")
def list_defaults():
    """List the utility types available in the defaults library."""
    settings = _load_settings()
    library = _load_library(settings)

    print("[bold]Available utility types[/bold]")
    if not len(library):
        print("- none")
    for entry in library.entries:
        print(f"- {entry.key}: {entry.spec}")


if __name__ == "__main__":
    app()
