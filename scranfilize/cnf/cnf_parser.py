"""
Strict DIMACS CNF parser.

Reads the whole byte stream into memory, walks the header byte by byte
and scans the clause section token by token.  Every format violation is
fatal and raised as :class:`CNFParseError` carrying the 1-based line
number at which it was detected.
"""
import re
from typing import BinaryIO, List, Tuple

from scranfilize.cnf.cnf_types import CnfDocument
from scranfilize.core.errors import CNFParseError
from scranfilize.core.logging import get_logger

logger = get_logger("scranfilize.parser")

INT_MAX = 2 ** 31 - 1
_INT_MAX_DIGITS = len(str(INT_MAX))
EOF = -1

_SPACE = frozenset(b" \t\r\n")
_DIGITS = frozenset(b"0123456789")
_NEWLINE = ord("\n")
_COMMENT = ord("c")
_HEADER = ord("p")
_MINUS = ord("-")
_ZERO = ord("0")

_SPACE_RUN = re.compile(rb"[ \t\r\n]+")
_DIGIT_RUN = re.compile(rb"[0-9]+")


def _describe(ch: int) -> str:
    if 32 <= ch < 127:
        return f"'{chr(ch)}'"
    return f"(code '{ch}')"


class DimacsParser:
    """Single-use parser over an in-memory DIMACS buffer."""

    def __init__(self, data: bytes, path: str = "<stdin>"):
        self.data = data
        self.path = path
        self.pos = 0
        self.lineno = 1

    def error(self, message: str) -> CNFParseError:
        return CNFParseError(self.path, self.lineno, message)

    def error_at(self, consumed: int, message: str) -> CNFParseError:
        """Error whose line number accounts for every byte before ``consumed``."""
        consumed = min(consumed, len(self.data))
        lineno = self.lineno + self.data.count(b"\n", self.pos, consumed)
        return CNFParseError(self.path, lineno, message)

    def next(self) -> int:
        if self.pos >= len(self.data):
            return EOF
        ch = self.data[self.pos]
        self.pos += 1
        if ch == _NEWLINE:
            self.lineno += 1
        return ch

    # Header

    def _number(self, expected: str, too_large: str) -> Tuple[int, int]:
        """Reads an unsigned decimal; returns it with the byte that ended it."""
        ch = self.next()
        if ch not in _DIGITS:
            raise self.error(expected)
        value = ch - _ZERO
        ch = self.next()
        while ch in _DIGITS:
            value = value * 10 + (ch - _ZERO)
            if value > INT_MAX:
                raise self.error(too_large)
            ch = self.next()
        return value, ch

    def parse_header(self) -> Tuple[int, int]:
        while True:
            ch = self.next()
            if ch == EOF:
                raise self.error("unexpected end-of-file before header")
            if ch == _HEADER:
                break
            if ch == _COMMENT:
                ch = self.next()
                while ch != _NEWLINE:
                    if ch == EOF:
                        raise self.error("unexpected end-of-file in header comment")
                    ch = self.next()
                continue
            raise self.error(f"unexpected character {_describe(ch)}")

        for expected in b" cnf ":
            if self.next() != expected:
                raise self.error("invalid DIMACS header")

        max_var, ch = self._number("expected digit after 'p cnf '", "variable number too large")
        if ch != ord(" "):
            raise self.error("expected space after variable number")
        specified, ch = self._number(
            f"expected digit after 'p cnf {max_var}'", "clause number too large")

        logger.info(f"found 'p cnf {max_var} {specified}' header")

        while ch != _NEWLINE:
            if ch not in _SPACE:
                raise self.error("expected white space before new line")
            ch = self.next()

        return max_var, specified

    # Clauses

    def parse_clauses(self, max_var: int, specified: int) -> List[Tuple[int, ...]]:
        data = self.data
        n = len(data)
        clauses: List[Tuple[int, ...]] = []
        literals: List[int] = []
        pos = self.pos

        while True:
            if pos >= n:
                if literals:
                    raise self.error_at(n, "terminating zero missing")
                if len(clauses) < specified:
                    missing = specified - len(clauses)
                    raise self.error_at(
                        n, f"{missing} clause{'' if missing == 1 else 's'} missing")
                break

            ch = data[pos]
            if ch in _SPACE:
                pos = _SPACE_RUN.match(data, pos).end()
                continue
            if ch == _COMMENT:
                nl = data.find(b"\n", pos)
                pos = n if nl < 0 else nl + 1
                continue

            negative = ch == _MINUS
            start = pos + 1 if negative else pos
            if negative:
                if start >= n or data[start] not in _DIGITS:
                    raise self.error_at(start + 1, "expected digit after '-'")
                if data[start] == _ZERO:
                    raise self.error_at(start + 1, "expected non-zero digit after '-'")
            elif ch not in _DIGITS:
                raise self.error_at(pos + 1, "expected digit or '-'")

            end = _DIGIT_RUN.match(data, start).end()
            significant = data[start:end].lstrip(b"0")
            if len(significant) > _INT_MAX_DIGITS:
                raise self.error_at(end, "variable too large")
            idx = int(significant) if significant else 0
            if idx > INT_MAX:
                raise self.error_at(end, "variable too large")
            if idx > max_var:
                raise self.error_at(end + 1, "maximum variable index exceeded")
            if end < n:
                after = data[end]
                if after not in _SPACE and after != _COMMENT:
                    raise self.error_at(
                        end + 1, f"unexpected character {_describe(after)} after literal")
            if len(clauses) == specified:
                raise self.error_at(end + 1, "too many clauses")

            if idx:
                literals.append(-idx if negative else idx)
            else:
                clauses.append(tuple(literals))
                literals = []
            pos = end

        self.lineno += data.count(b"\n", self.pos, n)
        self.pos = n
        return clauses

    def parse(self) -> CnfDocument:
        max_var, specified = self.parse_header()
        clauses = self.parse_clauses(max_var, specified)
        return CnfDocument(max_var=max_var, clauses=clauses)


def parse_dimacs_bytes(data: bytes, path: str = "<stdin>") -> CnfDocument:
    """Parses a complete DIMACS buffer."""
    return DimacsParser(data, path).parse()


def parse_dimacs(stream: BinaryIO, path: str = "<stdin>") -> CnfDocument:
    """Parses an already-open (and already decompressed) DIMACS byte stream."""
    data = stream.read()
    if isinstance(data, str):
        data = data.encode("utf-8")
    return parse_dimacs_bytes(data, path)


def read_dimacs_from_string(text: str, path: str = "<string>") -> CnfDocument:
    """Parses DIMACS text held in a string."""
    return parse_dimacs_bytes(text.encode("utf-8"), path)
