from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Hashable, Optional, Union


@dataclass(frozen=True)
class Document:
    id: Hashable
    text: str


@dataclass(frozen=True)
class Open:
    position: int


@dataclass(frozen=True)
class Close:
    """
    A close marker. `label_blob` is the label block that directly follows
    the marker, delimiters included (e.g. "{#alpha,beta}"), or None when no
    block follows.
    """

    position: int
    label_blob: Optional[str] = None


@dataclass(frozen=True)
class Text:
    content: str
    position: int


Token = Union[Open, Close, Text]


class DiagnosticKind(str, Enum):
    UNBALANCED_TAGS = "UnbalancedTags"
    MISSING_LABEL_BLOCK = "MissingLabelBlock"
    EMPTY_LABEL = "EmptyLabel"


@dataclass(frozen=True)
class Diagnostic:
    document_id: Hashable
    kind: DiagnosticKind
    detail: str
    # Offset of the offending marker in the source text; None for
    # document-level findings.
    position: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "doc": self.document_id,
            "kind": self.kind.value,
            "detail": self.detail,
            "position": self.position,
        }


@dataclass(frozen=True)
class Record:
    """
    One output row. `category` is None when the label could not be resolved.
    """

    document_id: Hashable
    category: Optional[str]
    text: str

    @property
    def resolved(self) -> bool:
        return self.category is not None

    def to_dict(self) -> dict[str, Any]:
        return {"doc": self.document_id, "qcode": self.category, "text": self.text}


@dataclass
class ParseResult:
    records: list[Record] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    # The document with all markup removed.
    stripped_text: str = ""

    @property
    def categories(self) -> list[str]:
        """Distinct resolved categories in first-seen order."""
        return list(
            dict.fromkeys(r.category for r in self.records if r.category is not None)
        )
