"""
Markup configuration: the literals that make up the coding grammar.

    (QCODE) coded text (/QCODE){#code_a,code_b}
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class MarkupConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    open_marker: str = "(QCODE)"
    close_marker: str = "(/QCODE)"
    block_open: str = "{"
    block_close: str = "}"
    sigil: str = "#"
    separator: str = ","
    linebreak: str = "<br>"

    @field_validator(
        "open_marker", "close_marker", "block_open", "block_close", "sigil", "separator"
    )
    @classmethod
    def must_not_be_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("markup literals must be non-empty")
        return v

    @model_validator(mode="after")
    def markers_must_differ(self) -> "MarkupConfig":
        if self.open_marker == self.close_marker:
            raise ValueError("open_marker and close_marker must differ")
        if self.open_marker in self.close_marker or self.close_marker in self.open_marker:
            raise ValueError("one marker may not contain the other")
        return self

    @classmethod
    def from_yaml(cls, path: Path) -> "MarkupConfig":
        """
        Read a YAML mapping of field overrides, e.g.::

            open_marker: "[CODE]"
            close_marker: "[/CODE]"
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping of markup settings")
        return cls(**data)


DEFAULT_CONFIG = MarkupConfig()


def default_workers() -> int:
    """
    Worker count for corpus parsing.

    Defaults to 1 (sequential); override with QCODE_PARSE_WORKERS=N.
    """
    workers = int(os.getenv("QCODE_PARSE_WORKERS", "1"))
    if workers < 1:
        raise ValueError("QCODE_PARSE_WORKERS must be at least one")
    return workers
