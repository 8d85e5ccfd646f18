"""
Split a coded document into Open / Close / Text tokens.

Text tokens are emitted between every pair of markers and at both ends of the
document, even when empty, so that directly adjacent markers stay visible to
the parser.

>>> [type(t).__name__ for t in tokenize("a (QCODE)b(/QCODE){#x} c")]
['Text', 'Open', 'Text', 'Close', 'Text']
"""

from collections.abc import Iterator, Sequence

from qcode_annotations.config import DEFAULT_CONFIG, MarkupConfig
from qcode_annotations.schemas import Close, Open, Text, Token


def _find_label_block(text: str, start: int, config: MarkupConfig) -> str | None:
    """Return the label block beginning exactly at `start`, if there is one."""
    if not text.startswith(config.block_open, start):
        return None
    body_start = start + len(config.block_open)
    end = text.find(config.block_close, body_start)
    if end == -1:
        # Unterminated: the remainder is left to the caller as trailing text.
        return None
    body = text[body_start:end]
    if (
        config.block_open in body
        or config.open_marker in body
        or config.close_marker in body
    ):
        return None
    return text[start : end + len(config.block_close)]


def iter_tokens(text: str, config: MarkupConfig = DEFAULT_CONFIG) -> Iterator[Token]:
    pos = 0
    while True:
        next_open = text.find(config.open_marker, pos)
        next_close = text.find(config.close_marker, pos)
        if next_open == -1 and next_close == -1:
            yield Text(text[pos:], pos)
            return

        if next_close == -1 or (next_open != -1 and next_open < next_close):
            yield Text(text[pos:next_open], pos)
            yield Open(next_open)
            pos = next_open + len(config.open_marker)
        else:
            yield Text(text[pos:next_close], pos)
            after = next_close + len(config.close_marker)
            blob = _find_label_block(text, after, config)
            yield Close(next_close, blob)
            pos = after + (len(blob) if blob is not None else 0)


def tokenize(text: str, config: MarkupConfig = DEFAULT_CONFIG) -> list[Token]:
    return list(iter_tokens(text, config))


def render_tokens(tokens: Sequence[Token], config: MarkupConfig = DEFAULT_CONFIG) -> str:
    """Inverse of `tokenize`: rebuild the exact source text."""
    parts: list[str] = []
    for token in tokens:
        if isinstance(token, Text):
            parts.append(token.content)
        elif isinstance(token, Open):
            parts.append(config.open_marker)
        else:
            parts.append(config.close_marker)
            if token.label_blob is not None:
                parts.append(token.label_blob)
    return "".join(parts)
