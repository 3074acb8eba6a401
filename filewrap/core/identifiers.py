"""Identifier sanitizing for generated C++ symbols.

WHY: File names and logical names contain dots, hyphens, spaces, and
other characters that are not legal in C++ identifiers. Generated code
must compile, so every name that becomes a symbol goes through here.

HOW: Character-class substitution: every character that is not an ASCII
letter or digit becomes an underscore. Data identifiers get a fixed "k"
prefix, which also keeps them from starting with a digit.

RULES:
- sanitize_identifier() never deduplicates; collisions are detected by
  TableOfContents.append()
- toc_identifier() folds only hyphens, matching the accessor names that
  existing build rules expect
- Output shape for names that already work must not change
"""

from __future__ import annotations

import re

from filewrap.config import IDENTIFIER_PREFIX

_NON_ALNUM = re.compile(rb"[^A-Za-z0-9]")
_VALID_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")


def sanitize_identifier(text: str) -> str:
    """Replace every non-alphanumeric character with an underscore.

    Substitution works on the UTF-8 bytes of text, so a multi-byte
    character becomes one underscore per byte.
    """
    raw = text.encode("utf-8", "surrogateescape")
    return _NON_ALNUM.sub(b"_", raw).decode("ascii")


def data_identifier(basename: str) -> str:
    """Identifier of the string_view constant holding one file's bytes.

    Example: ``"my-file.bin"`` → ``"kmy_file_bin"``.
    """
    return sanitize_identifier(IDENTIFIER_PREFIX + basename)


def toc_identifier(name: str) -> str:
    """Base identifier for the accessors: hyphens folded to underscores."""
    return name.replace("-", "_")


def header_guard(package: str, toc_ident: str) -> str:
    """Include guard token for the declaration artifact."""
    return sanitize_identifier("{}_{}_H_".format(package, toc_ident))


def is_valid_identifier(text: str) -> bool:
    """True if text is usable as a C++ identifier from position zero."""
    return bool(_VALID_IDENTIFIER.match(text))
