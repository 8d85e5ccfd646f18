"""
Load coded documents into a (doc_id, document_text) table.

Accepted sources:
  - a directory of .txt / .md files (doc_id = file stem)
  - a JSONL file, one {"doc_id": ..., "document_text": ...} object per line
  - a CSV file with doc_id and document_text columns
"""

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Any

import orjson
import polars as pl

from qcode_annotations.schemas import Document

TEXT_SUFFIXES = (".txt", ".md")
DOCUMENT_SCHEMA = {"doc_id": pl.String, "document_text": pl.String}


def empty_documents() -> pl.DataFrame:
    return pl.DataFrame(schema=DOCUMENT_SCHEMA)


def _read_folder(folder: Path) -> pl.DataFrame:
    paths = sorted(p for p in folder.iterdir() if p.suffix in TEXT_SUFFIXES)
    if not paths:
        logging.warning(f"No {'/'.join(TEXT_SUFFIXES)} files found in {folder}")
        return empty_documents()
    return pl.DataFrame(
        {
            "doc_id": [p.stem for p in paths],
            "document_text": [p.read_text(encoding="utf-8") for p in paths],
        },
        schema=DOCUMENT_SCHEMA,
    )


def _iter_jsonl(path: Path) -> Iterator[dict[str, Any]]:
    with open(path, "rb") as f:
        for n, line in enumerate(f):
            if not line.strip():
                continue
            d = orjson.loads(line)
            # accept the plain `text` key used by most corpus dumps
            text = d.get("document_text", d.get("text"))
            if text is None:
                raise KeyError(
                    f"{path}:{n + 1}: each JSONL record needs 'document_text' or 'text'"
                )
            yield {"doc_id": str(d.get("doc_id", n)), "document_text": text}


def _read_jsonl(path: Path) -> pl.DataFrame:
    rows = list(_iter_jsonl(path))
    if not rows:
        return empty_documents()
    return pl.DataFrame(rows, schema=DOCUMENT_SCHEMA)


def _read_csv(path: Path) -> pl.DataFrame:
    df = pl.read_csv(path, infer_schema_length=0)
    for col in DOCUMENT_SCHEMA:
        if col not in df.columns:
            raise KeyError(f"{path}: missing column '{col}'")
    return df.select(list(DOCUMENT_SCHEMA))


def read_documents(path: Path) -> pl.DataFrame:
    """
    Read a folder, JSONL or CSV source into a two-column DataFrame.
    """
    path = Path(path)
    if path.is_dir():
        df = _read_folder(path)
    elif path.suffix == ".jsonl":
        df = _read_jsonl(path)
    elif path.suffix == ".csv":
        df = _read_csv(path)
    elif path.suffix in TEXT_SUFFIXES:
        df = pl.DataFrame(
            {"doc_id": [path.stem], "document_text": [path.read_text(encoding="utf-8")]},
            schema=DOCUMENT_SCHEMA,
        )
    else:
        raise ValueError(f"Unsupported document source: {path}")
    logging.info(f"Read {len(df)} documents from {path}")
    return df


def documents_from_frame(df: pl.DataFrame) -> list[Document]:
    for col in DOCUMENT_SCHEMA:
        if col not in df.columns:
            raise KeyError(f"missing column '{col}'")
    return [
        Document(id=r["doc_id"], text=r["document_text"] or "")
        for r in df.select(list(DOCUMENT_SCHEMA)).iter_rows(named=True)
    ]
