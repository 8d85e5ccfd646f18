import logging
from pathlib import Path

import polars as pl


def export_records(df: pl.DataFrame, file_name: str | Path) -> None:
    """
    Write parsed records to CSV, plus an .xlsx copy beside it.

    :param df: frame from `parse_qcodes`
    :param file_name: target CSV path
    """
    file_path = Path(file_name)
    df.write_csv(file_path)
    try:
        df.write_excel(
            file_path.with_suffix(".xlsx"),
            header_format={"bold": True},
            autofit=True,
            freeze_panes=(1, 0),
        )
    except Exception as e:
        logging.warning(f"Skipping Excel export: {e}")


def count_codes(df: pl.DataFrame) -> pl.DataFrame:
    """Frequency of every code, with the number of documents using it."""
    return (
        df.group_by("qcode")
        .agg(
            pl.len().alias("frequency"),
            pl.col("doc").n_unique().alias("documents"),
        )
        .sort(["frequency", "qcode"], descending=[True, False], nulls_last=True)
    )


def export_counts(file_name: str | Path) -> Path:
    """
    Count codes in a CSV written by `export_records`, writing
    `<stem>-counts.csv` beside it.
    """
    file_path = Path(file_name)
    df = pl.read_csv(file_path, schema_overrides={"doc": pl.String, "qcode": pl.String})
    csv_out = file_path.parent / f"{file_path.stem}-counts.csv"
    count_codes(df).write_csv(csv_out)
    return csv_out


def export_diagnostics(df: pl.DataFrame, file_name: str | Path) -> None:
    df.write_csv(file_name)
