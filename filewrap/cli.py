"""Command-line interface for filewrap.

WHY: Build rules run filewrap as one step that turns resource files into
a .h/.cc pair. The CLI is the thin wrapper between the build system's
fixed positional arguments and the transcoding driver.

HOW: Uses argparse for the positional arguments
``PACKAGE NAME NAMESPACE OUTPUT_DECL OUTPUT_DEF INPUT...`` plus optional
verbosity and buffer-size flags. Configures logging on stderr, builds
the EmbedContext, and calls embed_files(). Any EmbedError is reported
once on stderr and ends the process with exit status 1.

RULES:
- Usage errors (missing arguments) exit with status 2 via argparse
- Invalid NAME, identifier collisions, and any I/O failure exit with 1
- An empty NAMESPACE argument disables namespace wrapping
- Status and error output goes to stderr; nothing is written to stdout
- The tool never retries; the build system decides on re-invocation
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from filewrap import __version__
from filewrap.config import DEFAULT_BUFFER_SIZE, DEFAULT_LOG_LEVEL, parse_buffer_size
from filewrap.core.driver import embed_files
from filewrap.core.ir import EmbedContext
from filewrap.errors import EmbedError, InputFileError, OutputFileError

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by -v flags.

    Without -v the level comes from FILEWRAP_LOG_LEVEL (default WARNING).
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = getattr(logging, DEFAULT_LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr)


def _buffer_size(value: str) -> int:
    try:
        return parse_buffer_size(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without touching files.

    RULES:
    - Five fixed positionals, then one or more inputs
    - Optional: -v/--verbose (repeatable), --buffer-size, --version
    """
    parser = argparse.ArgumentParser(
        prog="filewrap",
        description="Embed binary files into a C++ header/source pair with a "
                    "sentinel-terminated table of contents.",
    )

    parser.add_argument(
        "package",
        metavar="PACKAGE",
        help="Package label, used for the header guard and the #include path.",
    )

    parser.add_argument(
        "name",
        metavar="NAME",
        help="Logical name; hyphens become underscores in accessor names.",
    )

    parser.add_argument(
        "namespace",
        metavar="NAMESPACE",
        help="C++ namespace to wrap declarations in; pass '' for none.",
    )

    parser.add_argument(
        "output_decl",
        metavar="OUTPUT_DECL",
        help="Path of the generated header (.h).",
    )

    parser.add_argument(
        "output_def",
        metavar="OUTPUT_DEF",
        help="Path of the generated translation unit (.cc).",
    )

    parser.add_argument(
        "inputs",
        metavar="INPUT",
        nargs="+",
        help="Files to embed, in table order.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log each embedded file (-v) or every step (-vv).",
    )

    parser.add_argument(
        "--buffer-size",
        type=_buffer_size,
        default=DEFAULT_BUFFER_SIZE,
        help="Read/write buffer size in bytes (default: %(default)s).",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s {}".format(__version__),
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    - Exits with status 1 on any EmbedError, after the driver has removed
      the incomplete outputs
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    context = EmbedContext(
        package=args.package,
        name=args.name,
        namespace=args.namespace,
    )

    try:
        toc = embed_files(
            context,
            args.output_decl,
            args.output_def,
            args.inputs,
            buffer_size=args.buffer_size,
        )
    except (InputFileError, OutputFileError) as e:
        logger.error("I/O failure on %s", e.path)
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    except EmbedError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nCancelled by user.", file=sys.stderr)
        sys.exit(130)

    logger.info("%s: %d file(s) embedded", context.package_name, toc.size)


if __name__ == "__main__":
    main()
