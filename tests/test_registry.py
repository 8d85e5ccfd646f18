import polars as pl

from qcode_annotations.io.registry import (
    CodeRegistry,
    add_discovered_codes,
    empty_registry,
    read_registry,
    write_registry,
)


def test_new_codes_get_increasing_ids():
    registry = add_discovered_codes(["b", "a", "b", None])
    assert registry.rows() == [(1, "b", ""), (2, "a", "")]


def test_ids_continue_from_maximum():
    existing = pl.DataFrame(
        {"code_id": [1, 5], "code": ["x", "y"], "description": ["first", ""]}
    )
    registry = add_discovered_codes(["y", "z"], existing)
    assert registry["code_id"].to_list() == [1, 5, 6]
    assert registry["description"].to_list() == ["first", "", ""]


def test_no_new_codes_returns_registry_unchanged():
    registry = add_discovered_codes(["a"])
    assert add_discovered_codes(["a", None], registry).equals(registry)


def test_read_missing_registry(tmp_path):
    assert read_registry(tmp_path / "codes.csv").equals(empty_registry())


def test_registry_roundtrip(tmp_path):
    path = tmp_path / "codes.csv"
    write_registry(add_discovered_codes(["a", "b"]), path)
    assert read_registry(path).rows() == [(1, "a", ""), (2, "b", "")]


def test_code_registry_hook_persists_new_codes(tmp_path):
    path = tmp_path / "codes.csv"
    hook = CodeRegistry(path)
    assert hook(["a", "b"]) == ["a", "b"]
    assert hook(["b"]) == []
    assert hook(["c"]) == ["c"]
    assert CodeRegistry(path).codes["code"].to_list() == ["a", "b", "c"]
