import bz2
import gzip
import io
import lzma
import os
import shutil
import stat
import subprocess
import sys
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union

from scranfilize.cnf.cnf_parser import parse_dimacs
from scranfilize.cnf.cnf_types import CnfDocument
from scranfilize.core.errors import InputError, OutputError
from scranfilize.core.logging import get_logger

logger = get_logger("scranfilize.io")

PathLike = Union[str, Path]

_OPENERS = {
    ".gz": gzip.open,
    ".bz2": bz2.open,
    ".xz": lzma.open,
    ".lzma": lzma.open,
}


def _open_7z(path: Path) -> BinaryIO:
    exe = shutil.which("7z")
    if exe is None:
        raise InputError(f"can not read original CNF '{path}' ('7z' not found)")
    proc = subprocess.run(
        [exe, "x", "-so", str(path)],
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        check=False,
    )
    if proc.returncode != 0:
        raise InputError(f"can not read original CNF '{path}' ('7z' exit code {proc.returncode})")
    return io.BytesIO(proc.stdout)


@contextmanager
def open_source(path: Optional[PathLike] = None) -> Iterator[BinaryIO]:
    """
    Yields a binary stream of the original CNF.
    Reads stdin when ``path`` is None and decompresses by file suffix.
    """
    if path is None:
        logger.info("reading original CNF from '<stdin>'")
        yield sys.stdin.buffer
        return

    path = Path(path)
    if not path.exists():
        raise InputError(f"file '{path}' does not exist")

    suffix = path.suffix.lower()
    try:
        if suffix == ".7z":
            stream = _open_7z(path)
        else:
            stream = _OPENERS.get(suffix, open)(path, "rb")
    except OSError as e:
        raise InputError(f"can not read original CNF '{path}': {e}") from e

    logger.info(f"reading original CNF from '{path}'")
    with stream:
        try:
            yield stream
        except (OSError, EOFError, lzma.LZMAError) as e:
            raise InputError(f"can not read original CNF '{path}': {e}") from e


def _output_mode(path: Path) -> int:
    """Mode a plain ``open(path, "w")`` would leave: kept on overwrite, else 0666 minus umask."""
    if path.is_file():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _discard(temp_path: str) -> None:
    if os.path.exists(temp_path):
        os.remove(temp_path)


@contextmanager
def open_sink(path: Optional[PathLike] = None, force: bool = False) -> Iterator[BinaryIO]:
    """
    Yields a binary sink for the scrambled CNF.

    Writes to stdout when ``path`` is None.  File output goes to a temporary
    file next to the destination, which replaces it only if the body of the
    ``with`` block completes.  Write failures surface as OutputError.
    """
    if path is None:
        logger.info("writing scrambled CNF to '<stdout>'")
        try:
            yield sys.stdout.buffer
            sys.stdout.buffer.flush()
        except OSError as e:
            raise OutputError(f"can not write scrambled CNF '<stdout>': {e}") from e
        return

    path = Path(path)
    if path.exists():
        if not force:
            raise OutputError(f"path '{path}' exist (use '--force')")
        logger.warning(f"forced to overwrite existing '{path}'")

    try:
        fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f"{path.name}.tmp")
    except OSError as e:
        raise OutputError(f"can not write scrambled CNF '{path}': {e}") from e

    logger.info(f"writing scrambled CNF to '{path}'")
    try:
        with os.fdopen(fd, "wb") as f:
            os.chmod(temp_path, _output_mode(path))
            yield f
        os.replace(temp_path, path)
    except OSError as e:
        _discard(temp_path)
        raise OutputError(f"can not write scrambled CNF '{path}': {e}") from e
    except Exception:
        _discard(temp_path)
        raise


def read_dimacs(path: Optional[PathLike] = None) -> CnfDocument:
    """Opens (and decompresses) a CNF file and parses it."""
    with open_source(path) as stream:
        return parse_dimacs(stream, "<stdin>" if path is None else str(path))
