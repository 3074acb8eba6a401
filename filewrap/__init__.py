"""filewrap: embed binary resource files into C++ sources.

WHY: Build pipelines need to bundle resource files (certificates, shaders,
policy blobs, ...) directly into a compiled binary with no runtime file I/O
and no external data dependency. Hand-writing byte arrays does not scale and
breaks silently when a resource changes.

HOW: Three-stage pipeline: escape (one byte → one literal token), transcode
(stream each input file into a string literal and record its length), emit
(write a declaration .h and a definition .cc that share one table of
contents). Each stage is independently testable.

RULES:
- Every byte value 0..255 must round-trip exactly through the literal
- The byte count read from the input is the authoritative length
- The .h and .cc artifacts are always generated together from one context
- Every error is fatal; a failed run leaves no artifacts behind
"""

__version__ = "0.1.0"
