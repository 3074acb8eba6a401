"""Data model for one embedding run.

WHY: The driver produces one record per input file, and both emitters
need the same view of the run: the package/name/namespace context and
the ordered table of contents. Plain dataclasses give every stage one
well-typed contract, decoupling transcoding from emitting.

HOW: Three dataclasses:
  EmbedContext    — immutable run configuration and derived identifiers
  FileRecord      — one embedded file: name, identifier, exact length
  TableOfContents — ordered records plus the implicit terminal sentinel

RULES:
- Record order is command-line order; nothing reorders it
- The sentinel is never stored in records; entries() appends it exactly once
- FileRecord and EmbedContext are frozen once created
- byte_length is the count of bytes read, never the escaped text length
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from filewrap.core.identifiers import header_guard, toc_identifier


@dataclass(frozen=True)
class EmbedContext:
    """Package, logical name, and optional namespace of one run.

    RULES:
    - package: label for the header guard and the "package/name" include
    - name: logical name; hyphens fold to underscores for accessor names
    - namespace: empty string disables namespace wrapping in both artifacts
    """

    package: str
    name: str
    namespace: str = ""

    @property
    def toc_identifier(self) -> str:
        return toc_identifier(self.name)

    @property
    def header_guard(self) -> str:
        return header_guard(self.package, self.toc_identifier)

    @property
    def package_name(self) -> str:
        """``package/name``, or just ``name`` when the package is empty."""
        if self.package:
            return "{}/{}".format(self.package, self.name)
        return self.name

    @property
    def has_namespace(self) -> bool:
        return len(self.namespace) > 0

    @property
    def create_function(self) -> str:
        return "{}_create".format(self.toc_identifier)

    @property
    def size_function(self) -> str:
        return "{}_size".format(self.toc_identifier)


@dataclass(frozen=True)
class FileRecord:
    """One embedded input file.

    RULES:
    - original_name: the input's base name, the lookup key in the TOC
    - identifier: sanitized "k"-prefixed symbol of the string_view constant
    - byte_length: exact number of bytes read from the input
    - source_path: path the bytes were read from (None for the sentinel)
    """

    original_name: Optional[str]
    identifier: Optional[str]
    byte_length: int
    source_path: Optional[str] = None

    @property
    def is_sentinel(self) -> bool:
        return self.original_name is None and self.identifier is None


SENTINEL = FileRecord(original_name=None, identifier=None, byte_length=0)
"""Terminal TOC entry: null name, null data, zero length."""


@dataclass
class TableOfContents:
    """Ordered, sentinel-terminated sequence of FileRecords.

    WHY: Consumers compiled separately need an ABI-stable way to find the
    end of the table. They can iterate until the null sentinel, or call
    the size accessor; both are generated from this one structure.
    """

    records: List[FileRecord] = field(default_factory=list)

    def append(self, record: FileRecord) -> None:
        """Append a record in order.

        Identifier uniqueness is checked by the driver before the
        record's bytes are written.
        """
        self.records.append(record)

    def find(self, identifier: Optional[str]) -> Optional[FileRecord]:
        """Return the record using identifier, or None."""
        for record in self.records:
            if record.identifier == identifier:
                return record
        return None

    def entries(self) -> Iterator[FileRecord]:
        """Yield every record, then the sentinel."""
        yield from self.records
        yield SENTINEL

    @property
    def size(self) -> int:
        """Number of real entries, excluding the sentinel."""
        return len(self.records)

    def __len__(self) -> int:
        return self.size
