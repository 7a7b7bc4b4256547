"""Typer based command line entry points for OfferFlow."""

from __future__ import annotations

import locale
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from offerflow.config import RenderSettings, load_settings
from offerflow.core.errors import ConfigError, OfferFlowError, RenderError, WizardError
from offerflow.core.logger import get_logger
from offerflow.core.pipeline import GenerationProgress, Pipeline
from offerflow.core.wizard import WizardState
from offerflow.services.output import DirectorySink, bundle_archive
from offerflow.services.template_engine import RESERVED_TOKENS, extract_placeholders, mappable_placeholders
from offerflow_io.mapping import FixedMapping, HeaderAutoMappingStrategy, MappingError, unmapped_placeholders
from offerflow_io.pdf_io import PdfProcessingError, read_info
from offerflow_io.schema import TableData
from offerflow_io.table_reader import preview_frame, read_table
from offerflow_io.template_reader import TemplateFormatError, read_pasted_template, read_template

app = typer.Typer(help="Generate one personalized PDF per table record from a text template.")

STDIN_MARKER = "-"


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        help="Set global logging level (e.g. DEBUG/INFO/WARNING).",
    ),
) -> None:
    """Configure global CLI behaviour before executing commands."""

    logger = get_logger()

    level_value = getattr(logging, log_level.upper(), None)
    if not isinstance(level_value, int):
        raise typer.BadParameter(f"Unknown log level: {log_level}")

    logging.getLogger("offerflow_io").setLevel(level_value)
    logger.setLevel(level_value)

    # %x and %X in the date settings follow LC_TIME.
    try:
        locale.setlocale(locale.LC_TIME, "")
    except locale.Error:
        logger.warning("System time locale unavailable; dates use the C locale")


def _fail(message: str, code: int) -> typer.Exit:
    typer.secho(message, fg=typer.colors.RED, err=True)
    return typer.Exit(code=code)


def _load_table(path: Path) -> TableData:
    try:
        return read_table(path)
    except (FileNotFoundError, ValueError) as exc:
        raise _fail(f"Unable to read table: {exc}", 2) from exc


def _load_template(source: str) -> str:
    if source == STDIN_MARKER:
        return read_pasted_template(sys.stdin)
    try:
        return read_template(Path(source))
    except (FileNotFoundError, TemplateFormatError) as exc:
        raise _fail(f"Unable to read template: {exc}", 2) from exc


def _load_settings(path: Optional[Path]) -> RenderSettings:
    try:
        return load_settings(path)
    except ConfigError as exc:
        raise _fail(f"Unable to load settings: {exc}", 2) from exc


def _print_progress(progress: GenerationProgress) -> None:
    typer.secho(
        f"{progress.processed:>4}/{progress.total:<4} ok={progress.completed} failed={progress.failed} {progress.current}",
        err=True,
    )


@app.command("fields")
def cli_fields(
    template: str = typer.Argument(..., help="Template text file, or '-' to paste it on stdin"),
) -> None:
    """List the placeholders found in a template."""

    text = _load_template(template)
    found = extract_placeholders(text)
    mappable = mappable_placeholders(text)
    if not found:
        typer.echo("No placeholders found")
        return
    for token in mappable:
        typer.echo(token)
    reserved = [token for token in found if token in RESERVED_TOKENS]
    if reserved:
        typer.echo(f"Filled automatically: {', '.join(reserved)}")


@app.command("preview")
def cli_preview(
    table: Path = typer.Argument(..., help="Recipient table (.csv/.txt)"),
    rows: int = typer.Option(5, "--rows", min=0, help="Number of records to show"),
    show_all: bool = typer.Option(False, "--all", help="Show every record"),
) -> None:
    """Show the first records of a table."""

    data = _load_table(table)
    frame = preview_frame(data, None if show_all else rows)
    typer.echo(f"{len(data)} records, columns: {', '.join(data.columns)}")
    if not frame.empty:
        typer.echo(frame.to_string(index=False))


@app.command("automap")
def cli_automap(
    table: Path = typer.Argument(..., help="Recipient table (.csv/.txt)"),
    template: str = typer.Argument(..., help="Template text file, or '-' for stdin"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the mapping YAML here"),
    strict: bool = typer.Option(False, "--strict", help="Exit with code 1 when placeholders stay unmapped"),
) -> None:
    """Suggest a mapping by matching placeholder names to column names."""

    data = _load_table(table)
    placeholders = mappable_placeholders(_load_template(template))
    mapping = HeaderAutoMappingStrategy().map(placeholders, list(data.columns))
    for token, column in mapping.items():
        typer.echo(f"{token} -> {column}")
    missing = unmapped_placeholders(placeholders, mapping)
    if missing:
        typer.secho(f"Unmapped: {', '.join(missing)}", fg=typer.colors.YELLOW)
    if output is not None:
        FixedMapping.from_mapping(mapping).to_yaml(output)
        typer.echo(f"Mapping written to: {output}")
    if strict and missing:
        raise typer.Exit(code=1)


@app.command("generate")
def cli_generate(
    table: Path = typer.Argument(..., help="Recipient table (.csv/.txt)"),
    template: str = typer.Argument(..., help="Template text file, or '-' for stdin"),
    out: Path = typer.Option(..., "--out", "-o", help="Directory for generated PDFs", resolve_path=True),
    mapping_file: Optional[Path] = typer.Option(None, "--mapping", help="Mapping YAML file"),
    auto_map: bool = typer.Option(False, "--auto-map", help="Match placeholders to columns by name"),
    index: Optional[int] = typer.Option(None, "--index", min=1, help="Generate only this record (1-based)"),
    zip_path: Optional[Path] = typer.Option(None, "--zip", help="Also bundle the PDFs into this ZIP file"),
    settings_file: Optional[Path] = typer.Option(None, "--settings", help="Render settings YAML"),
) -> None:
    """Generate one PDF per record (or a single record with --index)."""

    logger = get_logger()
    settings = _load_settings(settings_file)
    data = _load_table(table)
    state = WizardState().load_table(data).load_template(_load_template(template))

    try:
        if auto_map:
            state = state.auto_map()
        if mapping_file is not None:
            fixed = FixedMapping.from_yaml(mapping_file)
            state = state.with_mapping(fixed.map(list(state.placeholders), list(data.columns)))
        state, request = state.begin_generation()
    except (MappingError, WizardError) as exc:
        logger.error("Mapping rejected: %s", exc)
        raise _fail(f"Mapping incomplete or invalid: {exc}", 2) from exc

    pipeline = Pipeline(DirectorySink(out), settings=settings, logger=logger)

    if index is not None:
        if index > len(request.records):
            raise _fail(f"Record {index} out of range (table has {len(request.records)} records)", 2)
        try:
            path = pipeline.generate_one(request.template, request.records[index - 1], request.mapping, index)
        except RenderError as exc:
            logger.error("Single generation failed: %s", exc, exc_info=True)
            raise _fail(str(exc), 1) from exc
        typer.echo(f"Generated: {path}")
        written, failed = [path], False
    else:
        try:
            result = pipeline.run(request, progress_cb=_print_progress)
        except OfferFlowError as exc:
            raise _fail(str(exc), 2) from exc
        typer.echo(f"Generated {len(result.written)} of {result.total} documents in {out}")
        for failure in result.failures:
            typer.secho(f"Failed #{failure.index} {failure.name}: {failure.error}", fg=typer.colors.RED)
        written, failed = result.written, not result.ok

    if zip_path is not None and written:
        bundle_archive(written, zip_path)
        typer.echo(f"Archive: {zip_path}")
    if failed:
        raise typer.Exit(code=1)


@app.command("inspect")
def cli_inspect(
    pdf: Path = typer.Argument(..., help="Generated PDF"),
) -> None:
    """Show page count and metadata of a PDF."""

    try:
        info = read_info(pdf)
    except (FileNotFoundError, PdfProcessingError) as exc:
        raise _fail(f"Unable to read PDF: {exc}", 2) from exc
    typer.echo(f"PDF: {info.path}")
    typer.echo(f"Pages: {info.page_count}")
    for key, value in sorted(info.metadata.items()):
        typer.echo(f"{key}: {value}")


if __name__ == "__main__":
    app()
