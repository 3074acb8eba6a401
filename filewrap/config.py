"""Configuration constants and .env loading.

WHY: Centralizes all configurable values so they are easy to find,
update, and override. Buffer sizes, log levels, and the generator label
that appears in the banner of every generated file are plain data, not
buried in emitter logic, so build maintainers can adjust them without
touching the transcoding code.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values. parse_buffer_size() provides a clear error when
an override is not a positive integer.

RULES:
- All defaults can be overridden via environment variables (FILEWRAP_*)
- IDENTIFIER_PREFIX and DIGEST_SIZE are part of the generated ABI and are
  NOT overridable
- DEFAULT_BUFFER_SIZE is 4 KiB unless FILEWRAP_BUFFER_SIZE says otherwise
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the working directory (where the build runs the tool)
load_dotenv()

# ---------------------------------------------------------------------------
# Generated ABI constants
# ---------------------------------------------------------------------------

IDENTIFIER_PREFIX = "k"
"""Fixed prefix for data identifiers; keeps them clear of reserved symbols."""

DIGEST_SIZE = 16
"""Size of the legacy md5digest field in FileToc. Always zero-filled."""

TOC_ARRAY_NAME = "kToc"
"""Name of the sentinel-terminated FileToc array in the definition artifact."""

COMMON_HEADER_GUARD = "SANDBOXED_API_FILE_TOC_H_"
"""Guard around the shared FileToc struct, identical across all generated headers."""


def parse_buffer_size(value: str | int) -> int:
    """Parse a read/write buffer size.

    WHY: Buffer sizes come from the environment or the command line as
    strings. A zero or negative size would make the read loop spin.

    HOW: int() conversion followed by a range check.

    RULES:
    - Raises ValueError for non-integers and values < 1
    """
    try:
        size = int(value)
    except (TypeError, ValueError):
        raise ValueError("Buffer size must be an integer, got {!r}".format(value)) from None
    if size < 1:
        raise ValueError("Buffer size must be positive, got {}".format(size))
    return size


# ---------------------------------------------------------------------------
# Runtime defaults
# ---------------------------------------------------------------------------

DEFAULT_BUFFER_SIZE = parse_buffer_size(os.getenv("FILEWRAP_BUFFER_SIZE", "4096"))
DEFAULT_LOG_LEVEL = os.getenv("FILEWRAP_LOG_LEVEL", "WARNING").upper()
GENERATOR_LABEL = os.getenv("FILEWRAP_GENERATOR", "sapi_cc_embed_data()")
