from qcode_annotations.parser.document import DocumentParser, parse_document
from qcode_annotations.parser.labels import UNRESOLVED, extract_codes, extract_labels
from qcode_annotations.parser.tokenizer import render_tokens, tokenize
from qcode_annotations.parser.validator import validate

__all__ = [
    "DocumentParser",
    "UNRESOLVED",
    "extract_codes",
    "extract_labels",
    "parse_document",
    "render_tokens",
    "tokenize",
    "validate",
]
