"""Shared test fixtures for the filewrap test suite.

WHY: Driver, emitter, and CLI tests all need input files on disk, a run
context, and a way to read the generated literals back out of a .cc
artifact. Centralizing them here keeps every module testing the same
reference scenario.

HOW: Pytest fixtures create input files under tmp_path. parse_literals()
pulls every ``absl::string_view`` constant out of a definition artifact
and decodes it with decode_literal(), so tests check bytes, not text.

RULES:
- All file I/O goes through tmp_path fixtures for isolation.
- The reference scenario is a.bin = b"\\x00\\x01", b.txt = b"hello".
- Generated banners use the fixed generator label "test" so expected
  text does not depend on the environment.
"""

import re
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

from filewrap.core.escape import decode_literal
from filewrap.core.ir import EmbedContext

SCENARIO_FILES: List[Tuple[str, bytes]] = [
    ("a.bin", b"\x00\x01"),
    ("b.txt", b"hello"),
]

TEST_GENERATOR = "test"

# The literal body may contain escaped quotes, so match escape pairs whole.
_LITERAL_RE = re.compile(
    r'constexpr absl::string_view (\w+) = \{"((?:[^"\\]|\\.)*)", (\d+)\};'
)


def parse_literals(cc_text: str) -> Dict[str, Tuple[bytes, int]]:
    """Map identifier → (decoded bytes, declared length) for a .cc artifact."""
    return {
        match.group(1): (decode_literal(match.group(2)), int(match.group(3)))
        for match in _LITERAL_RE.finditer(cc_text)
    }


@pytest.fixture
def write_inputs(tmp_path):
    """Factory writing (name, content) pairs into tmp_path/inputs."""

    def _write(files):
        input_dir = tmp_path / "inputs"
        input_dir.mkdir(exist_ok=True)
        paths = []
        for name, content in files:
            path = input_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)
            paths.append(path)
        return paths

    return _write


@pytest.fixture
def scenario_inputs(write_inputs):
    """The two reference input files, in order."""
    return write_inputs(SCENARIO_FILES)


@pytest.fixture
def output_paths(tmp_path):
    """(header path, source path) inside tmp_path/out."""
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    return out_dir / "res.h", out_dir / "res.cc"


@pytest.fixture
def context():
    """Context with a namespace."""
    return EmbedContext(package="sandboxed_api/sandbox2", name="policy-files", namespace="sapi")


@pytest.fixture
def plain_context():
    """Context without package prefix or namespace."""
    return EmbedContext(package="pkg", name="res", namespace="")


def read_text(path: Path) -> str:
    return path.read_bytes().decode("utf-8")
