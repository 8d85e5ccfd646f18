"""
qcode-parser: extract coded text spans from annotated documents.

Usage:
  qcode-parser parse [OPTIONS] SRC OUT_CSV
  qcode-parser count CSV
  qcode-parser codes [OPTIONS] SRC

Examples:
  qcode-parser parse interviews/ coded.csv
  qcode-parser parse corpus.jsonl coded.csv --codes codes.csv -v
  qcode-parser parse interviews/ coded.csv --strict --workers 4
  qcode-parser count coded.csv
"""

import logging
from pathlib import Path

import typer

from qcode_annotations.config import DEFAULT_CONFIG, MarkupConfig
from qcode_annotations.io.corpus import parse_corpus
from qcode_annotations.io.export import export_counts, export_diagnostics, export_records
from qcode_annotations.io.loader import documents_from_frame, read_documents
from qcode_annotations.io.registry import CodeRegistry
from qcode_annotations.parser.labels import extract_codes

app = typer.Typer(help=__doc__, no_args_is_help=True)


def setup_logging(verbose: int):
    """Set up logging based on verbosity level."""
    if verbose == 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:  # verbose >= 2
        level = logging.DEBUG

    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def load_config(config: Path | None) -> MarkupConfig:
    if config is None:
        return DEFAULT_CONFIG
    return MarkupConfig.from_yaml(config)


@app.command("parse", help="Parse coded documents and write one CSV row per code.")
def parse(
    src: Path = typer.Argument(
        ..., help="Folder of .txt/.md files, or a JSONL/CSV document table"
    ),
    out_csv: Path = typer.Argument(..., help="Output CSV file for coded spans"),
    config: Path = typer.Option(
        None, "--config", help="YAML file overriding the markup literals"
    ),
    codes: Path = typer.Option(
        None, "--codes", "-c", help="Code registry CSV to update with new codes"
    ),
    workers: int = typer.Option(
        None, "--workers", "-w", min=1, help="Parse documents with N threads"
    ),
    strict: bool = typer.Option(
        False,
        "--strict/--no-strict",
        help="Exit with status 1 if any coding error was found",
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    ),
) -> None:
    """Parse SRC and export records, counts and diagnostics."""
    setup_logging(verbose)
    markup = load_config(config)
    documents = read_documents(src)
    registry = CodeRegistry(codes) if codes is not None else None

    result = parse_corpus(
        documents,
        markup,
        n_workers=workers,
        on_codes=registry,
        progress=verbose > 0,
    )
    logging.info(
        f"Parsed {len(documents)} documents into {len(result.records)} records"
    )
    export_records(result.records, out_csv)
    if not result.records.is_empty():
        export_counts(out_csv)

    if not result.ok:
        diagnostics_csv = out_csv.parent / f"{out_csv.stem}-diagnostics.csv"
        export_diagnostics(result.diagnostics, diagnostics_csv)
        logging.warning(
            f"{len(result.diagnostics)} coding errors written to {diagnostics_csv}"
        )
        if strict:
            raise typer.Exit(code=1)


@app.command("count", help="Compute code frequencies from a CSV written by `parse`.")
def count(
    csv: Path = typer.Argument(..., help="CSV file from `parse`"),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    ),
) -> None:
    """Write `<stem>-counts.csv` beside CSV."""
    setup_logging(verbose)
    out = export_counts(csv)
    logging.info(f"Wrote {out}")


@app.command("codes", help="List the codes used in a set of documents.")
def codes(
    src: Path = typer.Argument(
        ..., help="Folder of .txt/.md files, or a JSONL/CSV document table"
    ),
    registry_csv: Path = typer.Option(
        None, "--codes", "-c", help="Code registry CSV to update with found codes"
    ),
    config: Path = typer.Option(
        None, "--config", help="YAML file overriding the markup literals"
    ),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v for INFO, -vv for DEBUG)",
    ),
) -> None:
    """Print each distinct code once, in first-seen order."""
    setup_logging(verbose)
    markup = load_config(config)
    found: list[str] = []
    for document in documents_from_frame(read_documents(src)):
        for code in extract_codes(document.text, markup):
            if code not in found:
                found.append(code)
    for code in found:
        typer.echo(code)
    if registry_csv is not None:
        CodeRegistry(registry_csv)(found)


if __name__ == "__main__":
    app()
