"""
scranfilize: a CNF scrambler producing logically equivalent DIMACS instances.
"""
from typing import TYPE_CHECKING

__version__ = "1.0.0"

# Lazy import
if TYPE_CHECKING:
    from scranfilize.scramble.scrambler import scramble_cnf, scramble_stream

def __getattr__(name: str):
    if name in ("scramble_cnf", "scramble_stream"):
        from scranfilize.scramble import scrambler
        return getattr(scrambler, name)
    raise AttributeError(f"module {__name__} has no attribute {name}")

__all__ = ["__version__", "scramble_cnf", "scramble_stream"]
