from qcode_annotations.parser.tokenizer import tokenize
from qcode_annotations.parser.validator import check_balance, validate
from qcode_annotations.schemas import DiagnosticKind


def kinds(diagnostics):
    return [d.kind for d in diagnostics]


def test_well_formed_document_is_clean():
    text = "(QCODE) outer (QCODE) inner (/QCODE){#b} tail (/QCODE){#a}"
    assert validate(tokenize(text), "doc") == []


def test_count_mismatch():
    diagnostics = validate(tokenize("(QCODE) dangling"), "doc")
    assert kinds(diagnostics) == [DiagnosticKind.UNBALANCED_TAGS]
    assert diagnostics[0].position is None
    assert "open (1) and close (0)" in diagnostics[0].detail


def test_out_of_order_markers_with_equal_counts():
    diagnostics = check_balance(tokenize("(/QCODE){#a} x (QCODE) y"), "doc")
    assert kinds(diagnostics) == [DiagnosticKind.UNBALANCED_TAGS]
    assert diagnostics[0].position == 0


def test_missing_label_block_reports_fragment():
    diagnostics = validate(tokenize("(QCODE) x (/QCODE)no-label-here"), 7)
    assert kinds(diagnostics) == [DiagnosticKind.MISSING_LABEL_BLOCK]
    d = diagnostics[0]
    assert d.document_id == 7
    assert d.position == 10
    assert "(/QCODE)no-label-here" in d.detail


def test_malformed_block_without_sigil():
    diagnostics = validate(tokenize("(QCODE)x(/QCODE){topic} more text here"), "doc")
    assert kinds(diagnostics) == [DiagnosticKind.MISSING_LABEL_BLOCK]
    assert "(/QCODE){topic}" in diagnostics[0].detail


def test_every_broken_close_is_reported():
    text = "(QCODE)a(/QCODE) (QCODE)b(/QCODE){#ok} (QCODE)c(/QCODE){}"
    diagnostics = validate(tokenize(text), "doc")
    assert kinds(diagnostics) == [DiagnosticKind.MISSING_LABEL_BLOCK] * 2
