"""
Open/close matching and span text reconstruction.

`SpanResolver` keeps one buffer of markup-free text for the whole document.
Each open marker remembers where in that buffer its span begins; when the
matching close arrives the tail of the buffer from that point is the span.
The tail is then collapsed into a single piece, so an enclosing span picks up
the child's text as-is instead of rebuilding it.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class OpenMarker:
    span_start: int  # index into the resolver's text buffer
    position: int  # offset of the open marker in the source text


@dataclass(frozen=True)
class ResolvedSpan:
    text: str
    open_position: int
    depth: int  # 0 for a top-level span


class NestingStack:
    def __init__(self) -> None:
        self._markers: list[OpenMarker] = []

    def __len__(self) -> int:
        return len(self._markers)

    def push(self, marker: OpenMarker) -> None:
        self._markers.append(marker)

    def pop(self) -> OpenMarker | None:
        """Innermost pending open, or None on underflow."""
        if not self._markers:
            return None
        return self._markers.pop()

    def peek(self) -> OpenMarker | None:
        return self._markers[-1] if self._markers else None

    def unclosed(self) -> list[OpenMarker]:
        return list(self._markers)

    def reset(self) -> None:
        self._markers.clear()


class SpanResolver:
    def __init__(self) -> None:
        self.stack = NestingStack()
        self._buffer: list[str] = []

    def add_text(self, content: str) -> None:
        if content:
            self._buffer.append(content)

    def open(self, position: int) -> None:
        self.stack.push(OpenMarker(span_start=len(self._buffer), position=position))

    def close(self) -> ResolvedSpan | None:
        marker = self.stack.pop()
        if marker is None:
            return None
        text = "".join(self._buffer[marker.span_start :])
        del self._buffer[marker.span_start :]
        self._buffer.append(text)
        # Whitespace right after the open marker belongs to the markup.
        return ResolvedSpan(
            text=text.lstrip(), open_position=marker.position, depth=len(self.stack)
        )

    @property
    def stripped_text(self) -> str:
        """All text seen so far with every marker and label block removed."""
        return "".join(self._buffer)

    def reset(self) -> None:
        self.stack.reset()
        self._buffer.clear()
