"""
Core module for scranfilize.
Provides error handling, logging and option handling.
"""
from scranfilize.core.errors import (
    ScranfilizeError, CNFError, CNFParseError, OptionError, InputError, OutputError
)
from scranfilize.core.logging import get_logger
from scranfilize.core.options import ScrambleOptions, make_options, derive_seed

__all__ = [
    "ScranfilizeError", "CNFError", "CNFParseError", "OptionError", "InputError", "OutputError",
    "get_logger",
    "ScrambleOptions", "make_options", "derive_seed",
]
