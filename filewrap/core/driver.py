"""Transcoding driver: stream input files into the generated artifacts.

WHY: This is the one place that touches the file system during a run.
It opens both outputs, streams every input through the byte escaper
into the definition artifact, records each file's exact length, and
hands the finished table of contents to the emitters.

HOW: embed_files() opens both outputs up front, writes the declaration
artifact, then the definition prologue, then each input via
transcode_file() in argument order, then the TOC epilogue. Inputs are
read in buffer_size chunks and escaped chunk by chunk, so no file is
held in memory as a whole or as escaped text.

RULES:
- Inputs are processed strictly in the order given, one at a time
- byte_length is the number of bytes read, never the escaped length
- OSError on an input → InputFileError; on an output → OutputFileError
- Every error is fatal; on failure both outputs are closed and the
  regular files among them removed, so no half-written artifact is left
  for the build. Symlinks and device nodes named as outputs are kept
- No retries and no per-file recovery
"""

from __future__ import annotations

import logging
import os
import stat
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, List, Sequence, Union

from filewrap.config import DEFAULT_BUFFER_SIZE, GENERATOR_LABEL
from filewrap.core.identifiers import data_identifier, is_valid_identifier
from filewrap.core.ir import EmbedContext, FileRecord, TableOfContents
from filewrap.emitters import EMITTERS
from filewrap.emitters.definition import DefinitionEmitter
from filewrap.errors import (
    EmbedError,
    IdentifierCollisionError,
    InputFileError,
    InvalidNameError,
    OutputFileError,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _reason(exc: OSError) -> str:
    return exc.strerror or str(exc)


@contextmanager
def _writing(path: PathLike) -> Iterator[None]:
    """Attribute an OSError raised while writing to the output at path."""
    try:
        yield
    except OSError as exc:
        raise OutputFileError(path, _reason(exc)) from exc


def _is_removable(path: PathLike) -> bool:
    """True if path is absent or a regular file (not followed through a link)."""
    try:
        mode = os.lstat(path).st_mode
    except FileNotFoundError:
        return True
    except OSError:
        return False
    return stat.S_ISREG(mode)


@contextmanager
def _output_stream(path: PathLike, buffer_size: int, created: List[Path]) -> Iterator[BinaryIO]:
    """Open an output artifact for binary write, truncating it.

    A regular file (or a new one) is added to ``created`` once it exists,
    so the caller can remove it if the run fails. Symlinks, devices and
    pipes are written through but never recorded. The stream is flushed
    and closed on every exit path.
    """
    removable = _is_removable(path)
    try:
        # buffering=1 means line buffering, which binary streams reject
        stream = open(path, "wb", buffering=max(buffer_size, 2))
    except OSError as exc:
        raise OutputFileError(path, _reason(exc)) from exc
    if removable:
        created.append(Path(path))
    else:
        logger.debug("Output %s is not a regular file; it will not be removed", path)
    try:
        yield stream
    finally:
        try:
            stream.close()
        except OSError as exc:
            raise OutputFileError(path, _reason(exc)) from exc


def _remove_outputs(paths: Sequence[Path]) -> None:
    for path in paths:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Failed to remove incomplete output: %s", path)
        else:
            logger.debug("Removed incomplete output %s", path)


def validate_context(context: EmbedContext) -> None:
    """Check that the run's NAME yields valid accessor identifiers.

    An empty NAME is accepted and yields ``_create``/``_size``.

    Raises:
        InvalidNameError: if the hyphen-folded name starts with a digit or
            contains characters not allowed in identifiers.
    """
    if context.toc_identifier and not is_valid_identifier(context.toc_identifier):
        raise InvalidNameError(
            "NAME {!r} does not form a valid C++ identifier "
            "(got {!r} after folding hyphens)".format(context.name, context.toc_identifier)
        )


def transcode_file(
    path: PathLike,
    out: BinaryIO,
    emitter: DefinitionEmitter,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    output_path: PathLike = "<definition>",
) -> FileRecord:
    """Stream one input file into a string literal in the definition artifact.

    Args:
        path: Input file path; its base name becomes the TOC key.
        out: The definition artifact's binary stream.
        emitter: The run's DefinitionEmitter.
        buffer_size: Bytes read per chunk.
        output_path: Path of ``out``, for error messages.

    Returns:
        The completed FileRecord.

    Raises:
        InputFileError: if the input cannot be opened or read.
        OutputFileError: if writing the literal fails.
    """
    basename = Path(path).name
    identifier = data_identifier(basename)

    try:
        src = open(path, "rb", buffering=0)
    except OSError as exc:
        raise InputFileError(path, _reason(exc)) from exc

    byte_length = 0
    with src:
        with _writing(output_path):
            emitter.begin_literal(out, identifier)
        while True:
            try:
                chunk = src.read(buffer_size)
            except OSError as exc:
                raise InputFileError(path, _reason(exc)) from exc
            if not chunk:
                break
            byte_length += len(chunk)
            with _writing(output_path):
                emitter.write_chunk(out, chunk)
        with _writing(output_path):
            emitter.end_literal(out, byte_length)

    logger.info("Embedded %s as %s (%d bytes)", path, identifier, byte_length)
    return FileRecord(
        original_name=basename,
        identifier=identifier,
        byte_length=byte_length,
        source_path=str(path),
    )


def embed_files(
    context: EmbedContext,
    output_decl: PathLike,
    output_def: PathLike,
    inputs: Sequence[PathLike],
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    generator: str = GENERATOR_LABEL,
) -> TableOfContents:
    """Generate the declaration and definition artifacts for inputs.

    WHY: The two artifacts are two views of one contract and must never
    be regenerated independently. This function is the only way to
    produce them.

    HOW: Opens both outputs, writes the header, streams every input into
    the translation unit, then writes the TOC and accessors.

    RULES:
    - At least one input is required
    - Inputs whose base names sanitize to the same identifier are
      rejected before their bytes are written
    - On any EmbedError (or interrupt) the outputs are removed and the
      error re-raised

    Args:
        context: Package, name, and namespace of the run.
        output_decl: Path of the .h artifact.
        output_def: Path of the .cc artifact.
        inputs: Input file paths, in order.
        buffer_size: Read/write buffer size in bytes.
        generator: Label written into the generated-file banners.

    Returns:
        The completed TableOfContents.
    """
    if not inputs:
        raise EmbedError("At least one input file is required")
    validate_context(context)

    declaration = EMITTERS["declaration"](context, generator)
    definition = EMITTERS["definition"](context, generator)
    toc = TableOfContents()
    created: List[Path] = []

    try:
        with ExitStack() as stack:
            decl_out = stack.enter_context(_output_stream(output_decl, buffer_size, created))
            def_out = stack.enter_context(_output_stream(output_def, buffer_size, created))

            with _writing(output_decl):
                declaration.write_prologue(decl_out)
                declaration.write_epilogue(decl_out, toc)
            logger.debug("Wrote %s artifact %s", declaration.name, output_decl)

            with _writing(output_def):
                definition.write_prologue(def_out)

            for path in inputs:
                identifier = data_identifier(Path(path).name)
                existing = toc.find(identifier)
                if existing is not None:
                    raise IdentifierCollisionError(
                        identifier, existing.source_path or "", str(path)
                    )
                record = transcode_file(path, def_out, definition, buffer_size, output_def)
                toc.append(record)

            with _writing(output_def):
                definition.write_epilogue(def_out, toc)
            logger.debug("Wrote %s artifact %s", definition.name, output_def)
    except (EmbedError, KeyboardInterrupt):
        _remove_outputs(created)
        raise

    logger.info(
        "Generated %s and %s with %d embedded file(s)",
        output_decl, output_def, toc.size,
    )
    return toc
