"""
Registry of known codes: one row per code with a stable integer id.

New codes are appended with ids continuing from the current maximum, so ids
never change once assigned.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

import polars as pl

REGISTRY_SCHEMA = {"code_id": pl.Int64, "code": pl.String, "description": pl.String}


def empty_registry() -> pl.DataFrame:
    return pl.DataFrame(schema=REGISTRY_SCHEMA)


def add_discovered_codes(
    codes: Iterable[str | None], registry: pl.DataFrame | None = None
) -> pl.DataFrame:
    """
    Return `registry` with every previously unseen code appended.

    >>> reg = add_discovered_codes(["a", "b"])
    >>> add_discovered_codes(["b", "c"], reg)["code_id"].to_list()
    [1, 2, 3]
    """
    if registry is None:
        registry = empty_registry()
    known = set(registry["code"].to_list())
    new_codes = [
        code
        for code in dict.fromkeys(codes)
        if code is not None and code not in known
    ]
    if not new_codes:
        return registry
    start = (registry["code_id"].max() or 0) + 1
    new_rows = pl.DataFrame(
        {
            "code_id": list(range(start, start + len(new_codes))),
            "code": new_codes,
            "description": [""] * len(new_codes),
        },
        schema=REGISTRY_SCHEMA,
    )
    return pl.concat([registry.select(list(REGISTRY_SCHEMA)), new_rows])


def read_registry(path: Path) -> pl.DataFrame:
    path = Path(path)
    if not path.exists():
        return empty_registry()
    df = pl.read_csv(path, schema_overrides=REGISTRY_SCHEMA)
    return df.select(list(REGISTRY_SCHEMA)).with_columns(
        pl.col("description").fill_null("")
    )


def write_registry(registry: pl.DataFrame, path: Path) -> None:
    registry.write_csv(path)


class CodeRegistry:
    """
    File-backed registry used as a post-parse hook: call it with the codes
    found in a document and it persists any new ones.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self.codes = read_registry(self.path)

    def __call__(self, codes: Iterable[str | None]) -> list[str]:
        before = len(self.codes)
        self.codes = add_discovered_codes(codes, self.codes)
        added = self.codes["code"].to_list()[before:]
        if added:
            logging.info(f"Registering {len(added)} new codes: {', '.join(added)}")
            write_registry(self.codes, self.path)
        return added
