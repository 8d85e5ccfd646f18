"""
Parse a table of coded documents into a (doc, qcode, text) table.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import polars as pl
from tqdm import tqdm

from qcode_annotations.config import DEFAULT_CONFIG, MarkupConfig, default_workers
from qcode_annotations.io.loader import documents_from_frame
from qcode_annotations.parser.document import DocumentParser
from qcode_annotations.schemas import Diagnostic, Document, ParseResult

RECORD_SCHEMA = {"doc": pl.String, "qcode": pl.String, "text": pl.String}
DIAGNOSTIC_SCHEMA = {
    "doc": pl.String,
    "kind": pl.String,
    "detail": pl.String,
    "position": pl.Int64,
}

CodesHook = Callable[[Iterable[str | None]], object]


@dataclass
class CorpusResult:
    records: pl.DataFrame
    diagnostics: pl.DataFrame

    @property
    def ok(self) -> bool:
        return self.diagnostics.is_empty()


def _frame(rows: list[dict], schema: dict) -> pl.DataFrame:
    # Document ids are opaque; keep them comparable across sources as strings.
    for row in rows:
        row["doc"] = str(row["doc"])
    return pl.DataFrame(rows, schema=schema)


def report_diagnostic(diagnostic: Diagnostic) -> None:
    logging.warning(
        f"{diagnostic.kind.value} in document {diagnostic.document_id}: "
        f"{diagnostic.detail}"
    )


def parse_corpus(
    documents: pl.DataFrame | Sequence[Document],
    config: MarkupConfig = DEFAULT_CONFIG,
    n_workers: int | None = None,
    on_codes: CodesHook | None = None,
    progress: bool = False,
) -> CorpusResult:
    """
    Parse every document, returning records and diagnostics in document order.

    :param documents: DataFrame with doc_id/document_text columns, or Documents
    :param config: markup literals
    :param n_workers: threads to parse with; defaults to QCODE_PARSE_WORKERS or 1
    :param on_codes: hook called with each document's distinct codes, e.g. a
        `CodeRegistry`
    :param progress: show a tqdm progress bar
    """
    if isinstance(documents, pl.DataFrame):
        documents = documents_from_frame(documents)
    if n_workers is None:
        n_workers = default_workers()
    if n_workers < 1:
        raise ValueError("n_workers must be at least one")

    parser = DocumentParser(config)
    if n_workers == 1:
        results: Iterable[ParseResult] = map(parser.parse_document, documents)
        executor = None
    else:
        executor = ThreadPoolExecutor(max_workers=n_workers)
        # map() yields in submission order regardless of completion order
        results = executor.map(parser.parse_document, documents)

    records: list[dict] = []
    diagnostics: list[dict] = []
    try:
        for document, result in tqdm(
            zip(documents, results),
            total=len(documents),
            desc="Parsing documents",
            disable=not progress,
        ):
            if not result.records and not result.diagnostics:
                logging.info(f"No QCODE blocks found in document {document.id}")
            for diagnostic in result.diagnostics:
                report_diagnostic(diagnostic)
            records.extend(r.to_dict() for r in result.records)
            diagnostics.extend(d.to_dict() for d in result.diagnostics)
            if on_codes is not None and result.categories:
                on_codes(result.categories)
    finally:
        if executor is not None:
            executor.shutdown()

    return CorpusResult(
        records=_frame(records, RECORD_SCHEMA),
        diagnostics=_frame(diagnostics, DIAGNOSTIC_SCHEMA),
    )


def parse_qcodes(
    documents: pl.DataFrame | Sequence[Document],
    config: MarkupConfig = DEFAULT_CONFIG,
    **kwargs,
) -> pl.DataFrame:
    """
    Records only; an empty frame means no coded text was found.

    >>> df = pl.DataFrame({"doc_id": ["1"], "document_text": ["(QCODE)hi(/QCODE){#greet}"]})
    >>> parse_qcodes(df).rows()
    [('1', 'greet', 'hi')]
    """
    return parse_corpus(documents, config, **kwargs).records
