import polars as pl

from qcode_annotations.io.corpus import parse_qcodes
from qcode_annotations.io.export import count_codes, export_counts, export_records


def test_export_records_and_counts(tmp_path, documents):
    out = tmp_path / "coded.csv"
    export_records(parse_qcodes(documents), out)
    assert out.exists()

    counts_csv = export_counts(out)
    assert counts_csv == tmp_path / "coded-counts.csv"
    counts = pl.read_csv(counts_csv)
    assert counts.columns == ["qcode", "frequency", "documents"]
    assert counts.height == 4
    assert counts["qcode"].to_list()[-1] is None


def test_count_codes():
    df = pl.DataFrame(
        {
            "doc": ["1", "1", "2", "2"],
            "qcode": ["a", "b", "a", "a"],
            "text": ["w", "x", "y", "z"],
        }
    )
    assert count_codes(df).rows() == [("a", 3, 2), ("b", 1, 1)]
