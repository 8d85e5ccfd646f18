"""
Structural checks over a document's token stream.

The checks run independently of span resolution and only report; they never
stop the parser from producing records.
"""

from collections.abc import Hashable, Sequence

from qcode_annotations.config import DEFAULT_CONFIG, MarkupConfig
from qcode_annotations.parser.labels import is_well_formed
from qcode_annotations.schemas import Close, Diagnostic, DiagnosticKind, Open, Text, Token

FRAGMENT_CONTEXT = 20


def _fragment(
    tokens: Sequence[Token], index: int, config: MarkupConfig
) -> str:
    """The close marker at `index` plus whatever directly follows it."""
    close = tokens[index]
    assert isinstance(close, Close)
    fragment = config.close_marker + (close.label_blob or "")
    if index + 1 < len(tokens):
        following = tokens[index + 1]
        if isinstance(following, Text):
            fragment += following.content[:FRAGMENT_CONTEXT]
    return fragment


def check_balance(tokens: Sequence[Token], document_id: Hashable) -> list[Diagnostic]:
    opens = sum(isinstance(t, Open) for t in tokens)
    closes = sum(isinstance(t, Close) for t in tokens)
    if opens != closes:
        return [
            Diagnostic(
                document_id,
                DiagnosticKind.UNBALANCED_TAGS,
                f"number of open ({opens}) and close ({closes}) markers do not "
                "match; erroneous output is likely",
            )
        ]

    # Equal counts can still be out of order.
    depth = 0
    for token in tokens:
        if isinstance(token, Open):
            depth += 1
        elif isinstance(token, Close):
            depth -= 1
            if depth < 0:
                return [
                    Diagnostic(
                        document_id,
                        DiagnosticKind.UNBALANCED_TAGS,
                        f"close marker at offset {token.position} has no "
                        "matching open marker",
                        token.position,
                    )
                ]
    return []


def check_label_blocks(
    tokens: Sequence[Token],
    document_id: Hashable,
    config: MarkupConfig = DEFAULT_CONFIG,
) -> list[Diagnostic]:
    diagnostics = []
    for i, token in enumerate(tokens):
        if isinstance(token, Close) and not is_well_formed(token.label_blob, config):
            diagnostics.append(
                Diagnostic(
                    document_id,
                    DiagnosticKind.MISSING_LABEL_BLOCK,
                    f"encoding error detected at: '{_fragment(tokens, i, config)}'",
                    token.position,
                )
            )
    return diagnostics


def validate(
    tokens: Sequence[Token],
    document_id: Hashable,
    config: MarkupConfig = DEFAULT_CONFIG,
) -> list[Diagnostic]:
    return check_balance(tokens, document_id) + check_label_blocks(
        tokens, document_id, config
    )
