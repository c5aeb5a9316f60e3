"""
Scrambling engine: rank generation, flip selection and emission.
"""
from scranfilize.scramble.rank import rank, expected_displacement
from scranfilize.scramble.flip import flip
from scranfilize.scramble.emitter import banner_lines, emit_scrambled
from scranfilize.scramble.scrambler import ScrambleMaps, build_maps, scramble_cnf, scramble_stream

__all__ = [
    "rank", "expected_displacement", "flip",
    "banner_lines", "emit_scrambled",
    "ScrambleMaps", "build_maps", "scramble_cnf", "scramble_stream",
]
