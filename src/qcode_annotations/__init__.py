from qcode_annotations.config import DEFAULT_CONFIG, MarkupConfig
from qcode_annotations.io.corpus import CorpusResult, parse_corpus, parse_qcodes
from qcode_annotations.parser.document import DocumentParser, parse_document
from qcode_annotations.schemas import Diagnostic, DiagnosticKind, Document, Record

__all__ = [
    "DEFAULT_CONFIG",
    "CorpusResult",
    "Diagnostic",
    "DiagnosticKind",
    "Document",
    "DocumentParser",
    "MarkupConfig",
    "Record",
    "parse_corpus",
    "parse_document",
    "parse_qcodes",
]
