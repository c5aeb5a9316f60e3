class ScranfilizeError(Exception):
    """Base exception for all scranfilize related errors."""
    pass

class CNFError(ScranfilizeError):
    """Raised when there is an issue with CNF processing or parsing."""
    pass

class CNFParseError(CNFError):
    """Raised when a DIMACS stream violates the format, with its position."""

    def __init__(self, path: str, lineno: int, message: str):
        super().__init__(f"{path}:{lineno}: {message}")
        self.path = path
        self.lineno = lineno
        self.message = message

class OptionError(ScranfilizeError):
    """Raised when scrambling options are invalid or conflict."""
    pass

class InputError(ScranfilizeError):
    """Raised when the original CNF can not be opened."""
    pass

class OutputError(ScranfilizeError):
    """Raised when the scrambled CNF can not be written."""
    pass
