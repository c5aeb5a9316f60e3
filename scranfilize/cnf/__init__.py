from scranfilize.cnf.cnf_types import CnfDocument, literal_set_signature
from scranfilize.cnf.cnf_parser import (
    DimacsParser, parse_dimacs, parse_dimacs_bytes, read_dimacs_from_string
)
from scranfilize.cnf.cnf_io import open_source, open_sink, read_dimacs

__all__ = [
    "CnfDocument", "literal_set_signature",
    "DimacsParser", "parse_dimacs", "parse_dimacs_bytes", "read_dimacs_from_string",
    "open_source", "open_sink", "read_dimacs",
]
