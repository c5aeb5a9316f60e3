import logging
import os
import sys

ROOT_LOGGER = "scranfilize"


class _MessageFormatter(logging.Formatter):
    """Prints ``[scranfilize] <msg>``, tagging anything above INFO with its level."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno > logging.INFO:
            message = f"{record.levelname.lower()}: {message}"
        return f"[{ROOT_LOGGER}] {message}"


def _configure_root() -> logging.Logger:
    root = logging.getLogger(ROOT_LOGGER)
    log_level_str = os.getenv("SCRANFILIZE_LOG_LEVEL", "INFO").upper()
    root.setLevel(getattr(logging, log_level_str, logging.INFO))

    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_MessageFormatter())
        root.addHandler(handler)

    # Keep stdout free for the scrambled CNF
    root.propagate = False
    return root


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Returns a logger in the ``scranfilize`` hierarchy.
    Only the root of that hierarchy owns a handler, with its level taken
    from SCRANFILIZE_LOG_LEVEL; children propagate to it.
    """
    root = _configure_root()
    if name == ROOT_LOGGER:
        return root
    if not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
