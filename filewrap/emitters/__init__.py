"""Artifact emitter registry.

WHY: The driver writes two artifacts per run and must always write both.
A central dict names them; embed_files() builds its emitters from it and
the tests check it against the emitter classes.

HOW: EMITTERS maps string keys to emitter *classes* (not instances).
Callers instantiate with the run's context:
``emitter = EMITTERS["definition"](context, generator)``.

RULES:
- Keys are snake_case identifiers
- Values are BaseEmitter subclasses (not instances)
- Both entries are used on every run; neither is optional
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from filewrap.emitters.declaration import DeclarationEmitter
from filewrap.emitters.definition import DefinitionEmitter

if TYPE_CHECKING:
    from filewrap.emitters.base import BaseEmitter

EMITTERS: dict[str, type[BaseEmitter]] = {
    "declaration": DeclarationEmitter,
    "definition": DefinitionEmitter,
}
