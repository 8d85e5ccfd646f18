import orjson
import pytest

from qcode_annotations.io.loader import documents_from_frame, read_documents


def test_read_folder(coded_folder):
    df = read_documents(coded_folder)
    assert df["doc_id"].to_list() == ["001", "002"]
    assert df["document_text"][1].startswith("(QCODE)I")


def test_read_empty_folder(tmp_path, caplog):
    df = read_documents(tmp_path)
    assert df.is_empty()
    assert "No .txt/.md files found" in caplog.text


def test_read_jsonl(tmp_path):
    path = tmp_path / "corpus.jsonl"
    with open(path, "wb") as f:
        f.write(orjson.dumps({"doc_id": 10, "document_text": "a"}) + b"\n")
        f.write(b"\n")
        f.write(orjson.dumps({"text": "b"}) + b"\n")
    df = read_documents(path)
    assert df.rows() == [("10", "a"), ("2", "b")]


def test_read_jsonl_without_text(tmp_path):
    path = tmp_path / "corpus.jsonl"
    path.write_bytes(orjson.dumps({"doc_id": 1}) + b"\n")
    with pytest.raises(KeyError):
        read_documents(path)


def test_read_csv(tmp_path):
    path = tmp_path / "docs.csv"
    path.write_text(
        'doc_id,document_text,extra\n1,"(QCODE)a(/QCODE){#x}",z\n', encoding="utf-8"
    )
    df = read_documents(path)
    assert df.columns == ["doc_id", "document_text"]
    assert df.rows() == [("1", "(QCODE)a(/QCODE){#x}")]


def test_read_csv_missing_column(tmp_path):
    path = tmp_path / "docs.csv"
    path.write_text("doc_id,body\n1,x\n", encoding="utf-8")
    with pytest.raises(KeyError):
        read_documents(path)


def test_single_text_file(coded_folder):
    df = read_documents(coded_folder / "001.txt")
    assert df["doc_id"].to_list() == ["001"]


def test_unsupported_source(tmp_path):
    path = tmp_path / "docs.xlsx"
    path.write_bytes(b"")
    with pytest.raises(ValueError):
        read_documents(path)


def test_documents_from_frame(coded_folder):
    documents = documents_from_frame(read_documents(coded_folder))
    assert [d.id for d in documents] == ["001", "002"]
