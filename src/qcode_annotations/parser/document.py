"""
Parse one coded document into records.

>>> parse_document("doc1", "ignore (QCODE) keep this (/QCODE){#topic} ignore").records
[Record(document_id='doc1', category='topic', text='keep this ')]
"""

import re
from collections.abc import Hashable

from qcode_annotations.config import DEFAULT_CONFIG, MarkupConfig
from qcode_annotations.parser.labels import extract_labels
from qcode_annotations.parser.spans import SpanResolver
from qcode_annotations.parser.tokenizer import tokenize
from qcode_annotations.parser.validator import validate
from qcode_annotations.schemas import (
    Close,
    Diagnostic,
    DiagnosticKind,
    Document,
    Open,
    ParseResult,
    Record,
    Text,
)

NEWLINE_RE = re.compile(r"\r\n|\r|\n")

_LABEL_PROBLEMS = {
    DiagnosticKind.MISSING_LABEL_BLOCK: "close marker lacks a well-formed label block",
    DiagnosticKind.EMPTY_LABEL: "label block holds no usable label",
}


def normalize_newlines(text: str, marker: str = DEFAULT_CONFIG.linebreak) -> str:
    return NEWLINE_RE.sub(marker, text)


class DocumentParser:
    """
    Stateless between calls: every `parse` builds its own nesting stack, so one
    parser may be shared by worker threads.
    """

    def __init__(self, config: MarkupConfig = DEFAULT_CONFIG):
        self.config = config

    def parse(self, document_id: Hashable, text: str) -> ParseResult:
        tokens = tokenize(text, self.config)
        diagnostics = validate(tokens, document_id, self.config)
        seen = {(d.kind, d.position) for d in diagnostics}
        records: list[Record] = []

        resolver = SpanResolver()
        for token in tokens:
            if isinstance(token, Text):
                resolver.add_text(token.content)
            elif isinstance(token, Open):
                resolver.open(token.position)
            elif isinstance(token, Close):
                span = resolver.close()
                if span is None:
                    # Stray close; reported by the balance check.
                    continue
                result = extract_labels(token.label_blob, self.config)
                if result.problem is not None and (
                    result.problem,
                    token.position,
                ) not in seen:
                    seen.add((result.problem, token.position))
                    diagnostics.append(
                        Diagnostic(
                            document_id,
                            result.problem,
                            f"{_LABEL_PROBLEMS[result.problem]} at offset "
                            f"{token.position}: '{token.label_blob or ''}'",
                            token.position,
                        )
                    )
                text_out = normalize_newlines(span.text, self.config.linebreak)
                records.extend(
                    Record(document_id, label, text_out) for label in result.labels
                )
        return ParseResult(
            records=records,
            diagnostics=diagnostics,
            stripped_text=normalize_newlines(
                resolver.stripped_text, self.config.linebreak
            ),
        )

    def parse_document(self, document: Document) -> ParseResult:
        return self.parse(document.id, document.text)


def parse_document(
    document_id: Hashable, text: str, config: MarkupConfig = DEFAULT_CONFIG
) -> ParseResult:
    return DocumentParser(config).parse(document_id, text)
