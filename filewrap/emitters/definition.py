"""Definition artifact (.cc) emitter.

WHY: The translation unit holds the actual bytes. Each input becomes one
absl::string_view constant whose literal is streamed straight from the
input file, followed by the kToc array that maps base names to those
constants and the two accessor bodies.

HOW: The driver calls the hooks in order:
  write_prologue()   — banner, includes, optional namespace opening
  begin_literal()    — ``constexpr absl::string_view kname = {"``
  write_chunk()      — escaped bytes, once per read chunk
  end_literal()      — ``", <byte_length>};``
  write_epilogue()   — kToc entries, sentinel, accessors, namespace close

RULES:
- The explicit length in each string_view is the byte count read, so
  embedded NULs are kept
- kToc lists records in argument order, then exactly one sentinel
  ``{nullptr, nullptr, 0, {}}``
- The digest field of every entry is ``{}`` (zero-filled)
- TOC names go through the byte escaper, so quotes or backslashes in a
  file name cannot break the literal
"""

from __future__ import annotations

from typing import BinaryIO

from filewrap.config import TOC_ARRAY_NAME
from filewrap.core.escape import escape_bytes
from filewrap.core.ir import FileRecord, TableOfContents
from filewrap.emitters.base import BaseEmitter

_FILE_HEADER = """\
// Automatically generated by {generator} build rule

#include "{package_name}.h"

#include "absl/base/macros.h"
#include "absl/strings/string_view.h"

"""

_NAMESPACE_BEGIN = """\
namespace {namespace} {{

"""

_DATA_BEGIN = 'constexpr absl::string_view {identifier} = {{"'

_DATA_END = """\
", {length}}};
"""

_TOC_BEGIN = """
constexpr FileToc {toc}[] = {{
"""

_TOC_ENTRY = """\
    {{"{name}", {identifier}.data(), {identifier}.size(), {{}}}},
"""

_TOC_END = """
    // Terminate array
    {{nullptr, nullptr, 0, {{}}}},
}};

const FileToc* {create}() {{
  return {toc};
}}

size_t {size}() {{
  return ABSL_ARRAYSIZE({toc}) - 1;
}}
"""

_NAMESPACE_END = """
}}  // namespace {namespace}
"""


def toc_name_literal(name: str) -> str:
    """Escape a base name for use inside the kToc string literal."""
    return escape_bytes(name.encode("utf-8", "surrogateescape")).decode("ascii")


class DefinitionEmitter(BaseEmitter):
    """Writes the data literals, the sentinel-terminated kToc, and accessors."""

    @property
    def name(self) -> str:
        return "definition"

    def write_prologue(self, out: BinaryIO) -> None:
        ctx = self.context
        self.write(out, _FILE_HEADER.format(
            generator=self.generator,
            package_name=ctx.package_name,
        ))
        if ctx.has_namespace:
            self.write(out, _NAMESPACE_BEGIN.format(namespace=ctx.namespace))

    def begin_literal(self, out: BinaryIO, identifier: str) -> None:
        self.write(out, _DATA_BEGIN.format(identifier=identifier))

    def write_chunk(self, out: BinaryIO, chunk: bytes) -> None:
        out.write(escape_bytes(chunk))

    def end_literal(self, out: BinaryIO, byte_length: int) -> None:
        self.write(out, _DATA_END.format(length=byte_length))

    def _toc_entry(self, record: FileRecord) -> str:
        return _TOC_ENTRY.format(
            name=toc_name_literal(record.original_name or ""),
            identifier=record.identifier,
        )

    def write_epilogue(self, out: BinaryIO, toc: TableOfContents) -> None:
        ctx = self.context
        self.write(out, _TOC_BEGIN.format(toc=TOC_ARRAY_NAME))
        for record in toc.entries():
            # The sentinel has its own fixed line in _TOC_END
            if record.is_sentinel:
                continue
            self.write(out, self._toc_entry(record))
        self.write(out, _TOC_END.format(
            toc=TOC_ARRAY_NAME,
            create=ctx.create_function,
            size=ctx.size_function,
        ))
        if ctx.has_namespace:
            self.write(out, _NAMESPACE_END.format(namespace=ctx.namespace))
