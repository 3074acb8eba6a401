"""Exception hierarchy for the embedding pipeline.

WHY: The tool runs as one atomic step of a larger build. Every failure is
fatal, but the CLI still needs to tell the user *which* path or name was
at fault. Typed exceptions carry that context up to a single reporting
point instead of each layer printing and exiting on its own.

HOW: EmbedError is the base; subclasses add the failing path where one
exists. The driver converts OSError into InputFileError/OutputFileError.

RULES:
- No error is recoverable; callers catch EmbedError only to report and exit
- Messages are complete sentences fit for stderr
"""

from __future__ import annotations

from pathlib import Path


class EmbedError(Exception):
    """Base class for all fatal embedding errors."""


class InputFileError(EmbedError):
    """Raised when an input file cannot be opened or read.

    RULES:
    - path is the input path exactly as given on the command line
    - The original OSError is chained as __cause__
    """

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__("Cannot read input {}: {}".format(path, reason))


class OutputFileError(EmbedError):
    """Raised when an output artifact cannot be opened, written, or closed."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__("Cannot write output {}: {}".format(path, reason))


class IdentifierCollisionError(EmbedError):
    """Raised when two inputs sanitize to the same data identifier.

    WHY: Two constants with the same name never compile, and two TOC
    entries with the same key make lookups ambiguous. Failing here gives
    a clear message instead of a compiler error in generated code.
    """

    def __init__(self, identifier: str, first: str, second: str) -> None:
        self.identifier = identifier
        self.first = first
        self.second = second
        super().__init__(
            "Inputs {!r} and {!r} both map to identifier {!r}; "
            "rename one of them".format(first, second, identifier)
        )


class InvalidNameError(EmbedError, ValueError):
    """Raised when NAME does not yield a valid C++ identifier."""


class LiteralDecodeError(ValueError):
    """Raised by decode_literal() on a malformed escape sequence."""
