import dataclasses
import random
from typing import BinaryIO, List

from scranfilize.cnf.cnf_parser import parse_dimacs
from scranfilize.cnf.cnf_types import CnfDocument
from scranfilize.core.logging import get_logger
from scranfilize.core.options import ScrambleOptions
from scranfilize.scramble.emitter import banner_lines, emit_scrambled
from scranfilize.scramble.flip import flip
from scranfilize.scramble.rank import rank

logger = get_logger("scranfilize.scramble")


@dataclasses.dataclass
class ScrambleMaps:
    """Per-run maps, each derived from the run seed."""
    variable_map: List[int]
    clause_map: List[int]
    flipped: List[bool]


def build_maps(doc: CnfDocument, options: ScrambleOptions) -> ScrambleMaps:
    """Ranks variables and clauses and selects flips, reseeding before each."""
    options = options.resolved()
    rng = random.Random()
    variable_map = rank(
        doc.max_var, rng, options.seed,
        permute=options.permute_variables,
        width=options.variable_move_window,
        absolute=options.absolute_windows,
    )
    clause_map = rank(
        doc.num_clauses, rng, options.seed,
        permute=options.permute_clauses,
        width=options.clause_move_window,
        absolute=options.absolute_windows,
    )
    flipped = flip(doc.max_var, options.literal_flip_probability, rng, options.seed)
    logger.debug(f"flipping {sum(flipped)} of {doc.max_var} variables")
    return ScrambleMaps(variable_map=variable_map, clause_map=clause_map, flipped=flipped)


def scramble_cnf(doc: CnfDocument, options: ScrambleOptions, sink: BinaryIO) -> ScrambleMaps:
    """Writes a scrambled, logically equivalent copy of ``doc`` to ``sink``."""
    options = options.resolved()
    maps = build_maps(doc, options)
    emit_scrambled(
        doc,
        maps.variable_map,
        maps.clause_map,
        maps.flipped,
        sink,
        reverse_variables=options.reverse_variables,
        reverse_clauses=options.reverse_clauses,
        banner=banner_lines(options),
    )
    return maps


def scramble_stream(source: BinaryIO,
                    sink: BinaryIO,
                    options: ScrambleOptions,
                    path: str = "<stdin>") -> ScrambleMaps:
    """Parses ``source`` and writes its scrambled form to ``sink``."""
    options = options.resolved()
    doc = parse_dimacs(source, path)
    return scramble_cnf(doc, options, sink)
