import polars as pl
import pytest

from qcode_annotations.parser.document import DocumentParser


@pytest.fixture
def parser():
    return DocumentParser()


@pytest.fixture
def documents():
    """A small document table mixing clean, nested and broken coding."""
    return pl.DataFrame(
        {
            "doc_id": ["clean", "nested", "plain", "broken"],
            "document_text": [
                "ignore (QCODE) keep this (/QCODE){#topic} ignore",
                "(QCODE) outer (QCODE) inner (/QCODE){#b} tail (/QCODE){#a}",
                "no coding at all",
                "(QCODE) x (/QCODE)no-label-here",
            ],
        }
    )


@pytest.fixture
def coded_folder(tmp_path):
    folder = tmp_path / "interviews"
    folder.mkdir()
    (folder / "001.txt").write_text(
        "Q: how?\n(QCODE)By bus, mostly.(/QCODE){#transport, habit}\n",
        encoding="utf-8",
    )
    (folder / "002.md").write_text(
        "(QCODE)I (QCODE)like(/QCODE){#emotion} it(/QCODE){#opinion}",
        encoding="utf-8",
    )
    (folder / "notes.csv").write_text("not,a,document\n", encoding="utf-8")
    return folder
