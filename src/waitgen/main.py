"""main.py - CLI entry point for waitgen.

Reads a wait event catalog and writes either the C support files
(``--code``) or the SGML documentation tables (``--docs``).  The whole
catalog is parsed, validated and rendered before the first file is written,
so a bad input never leaves partial output behind.
"""

from pathlib import Path

import typer

from waitgen.cli import display_path, error_exit, json_print
from waitgen.config import ConfigError, load_config
from waitgen.emit_code import render_code, write_code
from waitgen.emit_docs import render_docs, write_docs
from waitgen.parser import CatalogParseError, read_catalog
from waitgen.registry import DuplicateEventError, GenerationMode, build_catalog

_EPILOG = """\
[bold]Examples:[/bold]
  waitgen --code wait_event_names.txt                 Write the .h and .c files to .
  waitgen --code --outdir build/ wait_event_names.txt Write into build/
  waitgen --docs --outdir doc/ wait_event_names.txt   Write wait_event_types.sgml
  waitgen --code --dry-run --json names.txt           Show what would be written

[bold]Outputs:[/bold]
  --code   wait_event_types.h, pgstat_wait_event.c, wait_event_funcs_data.c
  --docs   wait_event_types.sgml

[dim]Settings such as output names, enum prefixes and hand-maintained
classes are read from waitgen.toml when one is found in the current
directory or a parent.[/dim]"""

app = typer.Typer(rich_markup_mode="rich")


@app.command(
    help="Generate wait event code and documentation from a wait event catalog.",
    epilog=_EPILOG,
)
def main(
    input_file: Path = typer.Argument(..., help="Wait event catalog (wait_event_names.txt)"),
    code: bool = typer.Option(False, "--code", help="Generate the C header and source files"),
    docs: bool = typer.Option(False, "--docs", help="Generate the SGML documentation tables"),
    outdir: Path = typer.Option(Path("."), "--outdir", help="Output directory"),
    config: Path | None = typer.Option(
        None, "--config", help="Path to waitgen.toml (searched upward from cwd if omitted)"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Render everything but write nothing"),
    json_output: bool = typer.Option(False, "--json", help="Output structured JSON"),
) -> None:
    """Generate wait event code or documentation from a catalog file."""
    if code == docs:
        raise typer.BadParameter(
            "specify exactly one of --code or --docs", param_hint="'--code' / '--docs'"
        )
    mode = GenerationMode.CODE if code else GenerationMode.DOCS

    try:
        cfg = load_config(config)
    except (FileNotFoundError, ConfigError) as exc:
        error_exit(str(exc), json_mode=json_output)

    if not outdir.is_dir():
        error_exit(f"Output directory not found: {outdir}", json_mode=json_output)

    try:
        records = read_catalog(input_file)
    except CatalogParseError as exc:
        error_exit(f"unable to parse {input_file}, {exc}", json_mode=json_output)
    except UnicodeDecodeError as exc:
        error_exit(f"{input_file} is not valid UTF-8: {exc}", json_mode=json_output)
    except OSError as exc:
        error_exit(f"Could not read {input_file}: {exc.strerror or exc}", json_mode=json_output)

    try:
        catalog = build_catalog(records, mode, cfg)
    except DuplicateEventError as exc:
        error_exit(f"{input_file}: {exc}", json_mode=json_output)

    try:
        if dry_run:
            if mode is GenerationMode.CODE:
                outputs = render_code(catalog, cfg, source_name=input_file.name)
            else:
                outputs = {cfg.docs: render_docs(catalog, cfg)}
            paths = [outdir / name for name in outputs]
        elif mode is GenerationMode.CODE:
            paths = write_code(catalog, outdir, cfg, source_name=input_file.name)
        else:
            paths = write_docs(catalog, outdir, cfg)
    except OSError as exc:
        error_exit(
            f"Could not write {exc.filename or outdir}: {exc.strerror or exc}",
            json_mode=json_output,
        )

    if json_output:
        json_print(
            {
                "mode": mode.value,
                "input": str(input_file),
                "outdir": str(outdir),
                "dry_run": dry_run,
                "categories": len(catalog.classes),
                "events": len(catalog),
                "files": [display_path(p, outdir) for p in paths],
            }
        )
        return

    verb = "Would write" if dry_run else "Wrote"
    typer.echo(
        f"{verb} {len(paths)} file(s) from {len(catalog)} wait events "
        f"in {len(catalog.classes)} classes",
        err=True,
    )
    for path in paths:
        typer.echo(f"  {path}", err=True)


def main_entry() -> None:
    """Package entry point for ``waitgen``."""
    app()


if __name__ == "__main__":
    main_entry()
