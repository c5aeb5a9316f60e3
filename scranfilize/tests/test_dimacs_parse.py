import io
import pytest
from pydantic import ValidationError
from scranfilize.cnf import CnfDocument, parse_dimacs, read_dimacs_from_string
from scranfilize.core.errors import CNFError, CNFParseError

def test_dimacs_simple():
    doc = read_dimacs_from_string("p cnf 3 1\n1 2 3 0\n")
    assert doc.max_var == 3
    assert doc.num_clauses == 1
    assert doc.clauses == [(1, 2, 3)]

def test_dimacs_from_byte_stream():
    doc = parse_dimacs(io.BytesIO(b"p cnf 2 2\n1 -2 0\n-1 2 0\n"), "mem.cnf")
    assert doc.clauses == [(1, -2), (-1, 2)]

def test_dimacs_comments_everywhere():
    dimacs = "c first\nc second\np cnf 2 2\n1 c inline\n-2 0 c trailing\n2 0\nc last"
    doc = read_dimacs_from_string(dimacs)
    assert doc.clauses == [(1, -2), (2,)]

def test_dimacs_literal_directly_followed_by_comment():
    doc = read_dimacs_from_string("p cnf 2 1\n1 2 0c done\n")
    assert doc.clauses == [(1, 2)]

def test_dimacs_clause_spanning_lines_and_multiple_per_line():
    doc = read_dimacs_from_string("p cnf 3 3\n1 -2\n3 0 2 0\n-3 0\n")
    assert doc.clauses == [(1, -2, 3), (2,), (-3,)]

def test_dimacs_tabs_and_carriage_returns():
    doc = read_dimacs_from_string("p cnf 2 1 \t\r\n1\t-2 0\r\n")
    assert doc.clauses == [(1, -2)]

def test_dimacs_duplicates_and_tautologies_are_kept():
    doc = read_dimacs_from_string("p cnf 2 1\n1 1 -1 2 0\n")
    assert doc.clauses == [(1, 1, -1, 2)]

def test_dimacs_empty_clause():
    doc = read_dimacs_from_string("p cnf 1 2\n0\n1 0\n")
    assert doc.clauses == [(), (1,)]

def test_dimacs_empty_formula():
    doc = read_dimacs_from_string("p cnf 0 0\n")
    assert doc.max_var == 0
    assert doc.clauses == []

def test_dimacs_leading_zeros_in_literal():
    doc = read_dimacs_from_string("p cnf 12 1\n012 -7 00\n")
    assert doc.clauses == [(12, -7)]

def test_dimacs_largest_header_values():
    doc = read_dimacs_from_string("p cnf 2147483647 0\n")
    assert doc.max_var == 2147483647

def test_dimacs_missing_zero():
    with pytest.raises(CNFParseError, match="terminating zero missing") as exc:
        read_dimacs_from_string("p cnf 3 1\n1 2 3")
    assert exc.value.lineno == 2

def test_dimacs_max_var_exceeded():
    with pytest.raises(CNFParseError, match="maximum variable index exceeded") as exc:
        read_dimacs_from_string("p cnf 2 1\n3 0\n")
    assert exc.value.lineno == 2

def test_dimacs_negative_max_var_exceeded():
    with pytest.raises(CNFParseError, match="maximum variable index exceeded"):
        read_dimacs_from_string("p cnf 2 1\n1 -3 0\n")

def test_dimacs_one_clause_missing():
    with pytest.raises(CNFParseError, match="1 clause missing"):
        read_dimacs_from_string("p cnf 3 2\n1 2 0\n")

def test_dimacs_several_clauses_missing():
    with pytest.raises(CNFParseError, match="2 clauses missing") as exc:
        read_dimacs_from_string("p cnf 3 3\n1 0\n")
    assert exc.value.lineno == 3

def test_dimacs_too_many_clauses():
    with pytest.raises(CNFParseError, match="too many clauses") as exc:
        read_dimacs_from_string("c a\nc b\np cnf 2 1\n1 0\n2 0\n")
    assert exc.value.lineno == 5

def test_dimacs_negative_zero():
    with pytest.raises(CNFParseError, match="expected non-zero digit after '-'"):
        read_dimacs_from_string("p cnf 1 1\n-0\n")

def test_dimacs_dangling_minus():
    with pytest.raises(CNFParseError, match="expected digit after '-'"):
        read_dimacs_from_string("p cnf 1 1\n- 1 0\n")

def test_dimacs_invalid_character():
    with pytest.raises(CNFParseError, match="expected digit or '-'"):
        read_dimacs_from_string("p cnf 1 1\nx 0\n")

def test_dimacs_garbage_after_literal():
    with pytest.raises(CNFParseError, match="unexpected character 'x' after literal"):
        read_dimacs_from_string("p cnf 1 1\n1x 0\n")

def test_dimacs_literal_overflow():
    with pytest.raises(CNFParseError, match="variable too large"):
        read_dimacs_from_string("p cnf 1 1\n99999999999 0\n")

@pytest.mark.parametrize("dimacs, message", [
    ("", "unexpected end-of-file before header"),
    ("c no newline", "unexpected end-of-file in header comment"),
    ("\np cnf 1 0\n", r"unexpected character \(code '10'\)"),
    ("q cnf 1 0\n", "unexpected character 'q'"),
    ("p dnf 1 0\n", "invalid DIMACS header"),
    ("p cnf  1 0\n", "expected digit after 'p cnf '"),
    ("p cnf 1\n", "expected space after variable number"),
    ("p cnf 1 x\n", "expected digit after 'p cnf 1'"),
    ("p cnf 1 0 x\n", "expected white space before new line"),
    ("p cnf 1 0", "expected white space before new line"),
    ("p cnf 2147483648 0\n", "variable number too large"),
    ("p cnf 1 2147483648\n", "clause number too large"),
])
def test_dimacs_header_errors(dimacs, message):
    with pytest.raises(CNFParseError, match=message):
        read_dimacs_from_string(dimacs)

def test_dimacs_error_reports_path_and_line():
    with pytest.raises(CNFParseError) as exc:
        parse_dimacs(io.BytesIO(b"p cnf 1 1\n\n\n2 0\n"), "broken.cnf")
    assert exc.value.path == "broken.cnf"
    assert exc.value.lineno == 4
    assert str(exc.value) == "broken.cnf:4: maximum variable index exceeded"
    assert isinstance(exc.value, CNFError)

def test_document_rejects_out_of_range_literals():
    with pytest.raises(ValidationError):
        CnfDocument(max_var=1, clauses=[[2]])
    with pytest.raises(ValidationError):
        CnfDocument(max_var=1, clauses=[[0]])

def test_dimacs_literal_with_many_leading_zeros():
    doc = read_dimacs_from_string("p cnf 1 1\n" + "0" * 5000 + "1 0\n")
    assert doc.clauses == [(1,)]

def test_dimacs_huge_literal_is_a_parse_error():
    with pytest.raises(CNFParseError, match="variable too large") as exc:
        read_dimacs_from_string("p cnf 1 1\n" + "9" * 5000 + " 0\n")
    assert exc.value.lineno == 2
