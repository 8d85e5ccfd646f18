from dataclasses import dataclass

from qcode_annotations.config import DEFAULT_CONFIG, MarkupConfig
from qcode_annotations.parser.tokenizer import iter_tokens
from qcode_annotations.schemas import Close, DiagnosticKind

# Category of a record whose label block could not be read.
UNRESOLVED = None


@dataclass(frozen=True)
class LabelResult:
    labels: list[str | None]
    problem: DiagnosticKind | None = None

    @property
    def resolved(self) -> bool:
        return self.problem is None


def is_well_formed(blob: str | None, config: MarkupConfig = DEFAULT_CONFIG) -> bool:
    """True for a delimited, sigil-prefixed label block such as "{#a,b}"."""
    return (
        blob is not None
        and blob.startswith(config.block_open + config.sigil)
        and blob.endswith(config.block_close)
        and len(blob) >= len(config.block_open + config.sigil + config.block_close)
    )


def split_labels(body: str, config: MarkupConfig = DEFAULT_CONFIG) -> list[str]:
    """
    Split the inside of a label block into trimmed, de-duplicated labels.

    Every label may carry its own sigil, so "a, b" and "a,#b" are the same.

    >>> split_labels(" a, b ,a,#c,")
    ['a', 'b', 'c']
    """
    labels: list[str] = []
    for piece in body.split(config.separator):
        label = piece.strip()
        if label.startswith(config.sigil):
            label = label[len(config.sigil) :].strip()
        if label and label not in labels:
            labels.append(label)
    return labels


def extract_labels(
    blob: str | None, config: MarkupConfig = DEFAULT_CONFIG
) -> LabelResult:
    """
    Parse the label block of a close marker.

    Returns the labels in source order. When the block is absent, lacks its
    sigil, or holds no usable label, the result carries a single unresolved
    placeholder and the kind of problem found, so the span text is still
    reported.
    """
    if not is_well_formed(blob, config):
        return LabelResult([UNRESOLVED], DiagnosticKind.MISSING_LABEL_BLOCK)
    assert blob is not None
    body = blob[len(config.block_open) + len(config.sigil) : -len(config.block_close)]
    labels = split_labels(body, config)
    if not labels:
        return LabelResult([UNRESOLVED], DiagnosticKind.EMPTY_LABEL)
    return LabelResult(labels)


def extract_codes(text: str, config: MarkupConfig = DEFAULT_CONFIG) -> list[str]:
    """
    All distinct labels used in a document, in first-seen order.
    Malformed label blocks are skipped.
    """
    codes: list[str] = []
    for token in iter_tokens(text, config):
        if isinstance(token, Close) and is_well_formed(token.label_blob, config):
            for label in extract_labels(token.label_blob, config).labels:
                if label is not None and label not in codes:
                    codes.append(label)
    return codes
