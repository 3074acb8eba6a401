"""Declaration artifact (.h) emitter.

WHY: Consumers include one header to get the FileToc record type and the
two accessors of a run. The record type is shared by every generated
header, so it sits behind its own fixed guard; the accessors sit behind
a per-run guard derived from the package and logical name.

HOW: Fixed templates filled from the EmbedContext. Nothing in the header
depends on the input files, so the whole artifact is written from the
prologue and epilogue hooks without looking at the TOC.

RULES:
- FileToc layout is {name, data, size, md5digest[16]} and must not change
- md5digest is documented as unused; it is never computed
- Namespace wrapping only when the context has a namespace
"""

from __future__ import annotations

from typing import BinaryIO

from filewrap.config import COMMON_HEADER_GUARD, DIGEST_SIZE
from filewrap.core.ir import TableOfContents
from filewrap.emitters.base import BaseEmitter

_FILE_HEADER = """\
// Automatically generated by {generator} build rule

#ifndef {common_guard}
#define {common_guard}

#include <cstddef>

struct FileToc {{
  const char* name;
  const char* data;
  size_t size;
  // Not actually used/computed by {generator}, this is for
  // compatibility with legacy code.
  unsigned char md5digest[{digest_size}];
}};

#endif  // {common_guard}

#ifndef {guard}
#define {guard}

"""

_NAMESPACE_BEGIN = """\
namespace {namespace} {{
"""

_TOC_DECLARATIONS = """
const FileToc* {create}();
size_t {size}();
"""

_NAMESPACE_END = """
}}  // namespace {namespace}
"""

_FILE_FOOTER = """
#endif  // {guard}
"""


class DeclarationEmitter(BaseEmitter):
    """Writes the FileToc struct, accessor declarations, and include guards."""

    @property
    def name(self) -> str:
        return "declaration"

    def write_prologue(self, out: BinaryIO) -> None:
        ctx = self.context
        self.write(out, _FILE_HEADER.format(
            generator=self.generator,
            common_guard=COMMON_HEADER_GUARD,
            digest_size=DIGEST_SIZE,
            guard=ctx.header_guard,
        ))
        if ctx.has_namespace:
            self.write(out, _NAMESPACE_BEGIN.format(namespace=ctx.namespace))
        self.write(out, _TOC_DECLARATIONS.format(
            create=ctx.create_function,
            size=ctx.size_function,
        ))

    def write_epilogue(self, out: BinaryIO, toc: TableOfContents) -> None:
        ctx = self.context
        if ctx.has_namespace:
            self.write(out, _NAMESPACE_END.format(namespace=ctx.namespace))
        self.write(out, _FILE_FOOTER.format(guard=ctx.header_guard))
