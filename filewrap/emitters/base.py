"""Abstract base emitter.

WHY: Both generated artifacts are views of one contract: the same
context, header guard, accessor names, and namespace. A common base
class holds that context so the two emitters cannot drift apart.

HOW: BaseEmitter is an ABC with a ``name`` property and two hooks:
``write_prologue()`` runs before any input is transcoded and
``write_epilogue()`` runs after the TOC is complete. Output streams are
binary; text is encoded as UTF-8 on write.

RULES:
- Subclasses MUST implement ``name``, ``write_prologue()`` and
  ``write_epilogue()``
- Emitters never open or close streams; the driver owns them
- Emitters are constructed with the run's EmbedContext and never mutate it
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO

from filewrap.config import GENERATOR_LABEL
from filewrap.core.ir import EmbedContext, TableOfContents


class BaseEmitter(ABC):
    """Abstract base for the declaration and definition emitters.

    To add an artifact kind:
    1. Create a new file in emitters/
    2. Subclass BaseEmitter
    3. Implement name, write_prologue() and write_epilogue()
    4. Register in EMITTERS in emitters/__init__.py
    """

    def __init__(self, context: EmbedContext, generator: str = GENERATOR_LABEL) -> None:
        self.context = context
        self.generator = generator

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable artifact name, e.g. 'declaration'."""

    @abstractmethod
    def write_prologue(self, out: BinaryIO) -> None:
        """Write everything that precedes the embedded data."""

    @abstractmethod
    def write_epilogue(self, out: BinaryIO, toc: TableOfContents) -> None:
        """Write everything that follows the embedded data.

        Args:
            out: The artifact's binary output stream.
            toc: The completed table of contents, in argument order.
        """

    @staticmethod
    def write(out: BinaryIO, text: str) -> None:
        out.write(text.encode("utf-8", "surrogateescape"))
