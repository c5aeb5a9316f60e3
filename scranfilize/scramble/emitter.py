from typing import BinaryIO, Iterable, List, Sequence

from scranfilize import __version__
from scranfilize.cnf.cnf_types import CnfDocument
from scranfilize.core.options import ScrambleOptions


def banner_lines(options: ScrambleOptions) -> List[str]:
    """Describes the run parameters; expects resolved options."""
    lines = [
        "Scranfilize CNF Scrambler",
        f"Version {__version__}",
        f"random seed '{options.seed}'",
    ]
    if options.reverse_variables:
        lines.append("reverse all variables ('-r')")
    if options.reverse_clauses:
        lines.append("reverse all clauses ('-R')")
    p = options.literal_flip_probability
    lines.append(f"literal flip probability {p:g} ('-f {p:g}')")
    kind = "absolute" if options.absolute_windows else "relative"
    if options.permute_variables:
        lines.append("randomly permuting variables")
    else:
        w = options.variable_move_window
        lines.append(f"{kind} variable move window {w:g} ('-v {w:g}')")
    if options.permute_clauses:
        lines.append("randomly permuting clauses")
    else:
        w = options.clause_move_window
        lines.append(f"{kind} clause move window {w:g} ('-c {w:g}')")
    return lines


def _write_comments(sink: BinaryIO, lines: Iterable[str]) -> None:
    for line in lines:
        sink.write(f"c {line}\n".encode("utf-8"))


def emit_scrambled(doc: CnfDocument,
                   variable_map: Sequence[int],
                   clause_map: Sequence[int],
                   flipped: Sequence[bool],
                   sink: BinaryIO,
                   reverse_variables: bool = False,
                   reverse_clauses: bool = False,
                   banner: Iterable[str] = ()) -> None:
    """
    Writes ``doc`` with the maps applied.

    Output position ``i`` takes source clause ``clause_map[i]`` (mirrored when
    ``reverse_clauses``).  A literal over variable ``v`` is renamed through
    ``variable_map`` after mirroring ``v`` when ``reverse_variables``; its sign
    is negated when the mirrored variable is flipped.
    """
    max_var = doc.max_var
    num_clauses = doc.num_clauses
    if len(variable_map) != max_var or len(flipped) != max_var:
        raise ValueError(f"variable maps must have length {max_var}")
    if len(clause_map) != num_clauses:
        raise ValueError(f"clause map must have length {num_clauses}")

    _write_comments(sink, banner)
    sink.write(f"p cnf {max_var} {num_clauses}\n".encode("ascii"))

    clauses = doc.clauses
    for j in clause_map:
        if reverse_clauses:
            j = num_clauses - 1 - j
        parts = []
        for src in clauses[j]:
            idx = abs(src)
            if reverse_variables:
                idx = max_var + 1 - idx
            dst = variable_map[idx - 1] + 1
            if src < 0:
                dst = -dst
            if flipped[idx - 1]:
                dst = -dst
            parts.append(f"{dst} ")
        parts.append("0\n")
        sink.write("".join(parts).encode("ascii"))

