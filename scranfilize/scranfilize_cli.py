import argparse
import sys
from typing import List, Optional

from scranfilize import __version__
from scranfilize.cnf.cnf_io import open_sink, open_source
from scranfilize.cnf.cnf_parser import parse_dimacs
from scranfilize.core.errors import CNFParseError, ScranfilizeError
from scranfilize.core.logging import get_logger
from scranfilize.core.options import ScrambleOptions, make_options
from scranfilize.scramble.emitter import banner_lines, emit_scrambled
from scranfilize.scramble.scrambler import build_maps

logger = get_logger("scranfilize")

EPILOG = (
    "By default the original CNF is read from '<stdin>' unless '<original-cnf>' "
    "is given. The scrambled CNF is written to '<stdout>' or '<scrambled-cnf>'. "
    "Inputs ending in '.gz', '.bz2', '.xz', '.lzma' or '.7z' are decompressed."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scranfilize",
        description="Scranfilize CNF Scrambler - write a logically equivalent, shuffled CNF.",
        epilog=EPILOG,
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("-p", dest="permute_variables", action="store_true",
                        help="Completely permute variables.")
    parser.add_argument("-P", dest="permute_clauses", action="store_true",
                        help="Completely permute clauses.")
    parser.add_argument("-r", dest="reverse_variables", action="store_true",
                        help="Reverse order of all variables.")
    parser.add_argument("-R", dest="reverse_clauses", action="store_true",
                        help="Reverse order of all clauses.")
    parser.add_argument("-s", dest="seed", type=int, metavar="<seed>",
                        help="Random number generator seed (default is to hash time and process id).")
    parser.add_argument("-f", dest="literal_flip_probability", type=float, metavar="<prob>",
                        help="Probability of flipping a literal (default '.01').")
    parser.add_argument("-v", dest="variable_move_window", type=float, metavar="<win>",
                        help="Relative variable move window (default '.01').")
    parser.add_argument("-c", dest="clause_move_window", type=float, metavar="<win>",
                        help="Relative clause move window (default '.01').")
    parser.add_argument("-a", dest="absolute_windows", action="store_true",
                        help="Use absolute move windows (window defaults become '1').")
    parser.add_argument("--force", action="store_true",
                        help="Force to overwrite existing file.")
    parser.add_argument("original", nargs="?", metavar="<original-cnf>",
                        help="Original CNF (default '<stdin>').")
    parser.add_argument("scrambled", nargs="?", metavar="<scrambled-cnf>",
                        help="Scrambled CNF (default '<stdout>').")
    return parser


def options_from_args(args: argparse.Namespace) -> ScrambleOptions:
    return make_options(
        seed=args.seed,
        permute_variables=args.permute_variables,
        permute_clauses=args.permute_clauses,
        reverse_variables=args.reverse_variables,
        reverse_clauses=args.reverse_clauses,
        literal_flip_probability=args.literal_flip_probability,
        variable_move_window=args.variable_move_window,
        clause_move_window=args.clause_move_window,
        absolute_windows=args.absolute_windows,
        force=args.force,
    ).resolved()


def run(args: argparse.Namespace) -> None:
    options = options_from_args(args)
    banner = banner_lines(options)
    for line in banner:
        logger.info(line)

    with open_source(args.original) as source:
        doc = parse_dimacs(source, args.original or "<stdin>")

    maps = build_maps(doc, options)

    with open_sink(args.scrambled, force=options.force) as sink:
        emit_scrambled(
            doc,
            maps.variable_map,
            maps.clause_map,
            maps.flipped,
            sink,
            reverse_variables=options.reverse_variables,
            reverse_clauses=options.reverse_clauses,
            banner=banner,
        )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        run(args)
    except CNFParseError as e:
        print(f"scranfilize: parse error: {e}", file=sys.stderr)
        sys.exit(1)
    except ScranfilizeError as e:
        print(f"scranfilize: error: {e}", file=sys.stderr)
        sys.exit(1)
    return 0


if __name__ == "__main__":
    main()
