"""Core escaping, identifier, data model, and transcoding modules.

WHY: The core package contains the part of filewrap with real correctness
constraints: exact byte round-tripping and valid generated symbols.
Emitters and the CLI are thin layers on top of it.

HOW: escape.py maps bytes to literal tokens, identifiers.py sanitizes
names into symbols, ir.py defines the run's data model, driver.py streams
input files into the definition artifact and assembles the TOC.

RULES:
- escape.py and identifiers.py are pure; no I/O
- driver.py owns all file handles of a run
"""
