"""Unit tests for identifier sanitizing and the run data model.

WHY: Generated symbols must compile, both artifacts must agree on every
derived name, and the table of contents must keep its sentinel contract.
A wrong identifier is a compile error in someone else's build.

HOW: Direct checks of the sanitizer functions, EmbedContext derived
properties, and TableOfContents ordering and sentinel rules.
"""

import pytest

from filewrap.core.identifiers import (
    data_identifier,
    header_guard,
    is_valid_identifier,
    sanitize_identifier,
    toc_identifier,
)
from filewrap.core.ir import SENTINEL, EmbedContext, FileRecord, TableOfContents


class TestSanitizer:
    """sanitize_identifier() replaces every non-alphanumeric character."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("my-file.bin", "my_file_bin"),
            ("plain", "plain"),
            ("ABC123", "ABC123"),
            ("a b/c\\d", "a_b_c_d"),
            ("", ""),
            ("__x__", "__x__"),
        ],
    )
    def test_substitution(self, text, expected):
        assert sanitize_identifier(text) == expected

    def test_multibyte_characters_become_one_underscore_per_byte(self):
        # "é" is two bytes in UTF-8
        assert sanitize_identifier("café") == "caf__"

    @pytest.mark.parametrize(
        "text",
        ["my-file.bin", "weird name (1).txt", "日本語.dat", "a\tb\nc", "%$#@!"],
    )
    def test_output_is_only_alnum_or_underscore(self, text):
        result = sanitize_identifier(text)
        assert all(c.isascii() and (c.isalnum() or c == "_") for c in result)

    def test_data_identifier_prefix(self):
        assert data_identifier("my-file.bin") == "kmy_file_bin"
        assert data_identifier("a.bin") == "ka_bin"

    def test_data_identifier_never_starts_with_digit(self):
        ident = data_identifier("3d.bin")
        assert ident == "k3d_bin"
        assert is_valid_identifier(ident)

    def test_collisions_are_not_deduplicated(self):
        assert data_identifier("a-b.bin") == data_identifier("a_b.bin")


class TestDerivedNames:
    """Accessor base names and header guards."""

    def test_toc_identifier_folds_hyphens_only(self):
        assert toc_identifier("policy-files") == "policy_files"
        assert toc_identifier("a.b") == "a.b"

    def test_header_guard(self):
        assert header_guard("sandboxed_api/sandbox2", "policy_files") == (
            "sandboxed_api_sandbox2_policy_files_H_"
        )

    def test_header_guard_with_empty_package(self):
        assert header_guard("", "res") == "_res_H_"

    @pytest.mark.parametrize(
        "text, valid",
        [
            ("res", True),
            ("_res", True),
            ("res_2", True),
            ("3d", False),
            ("", False),
            ("a.b", False),
            ("a-b", False),
        ],
    )
    def test_is_valid_identifier(self, text, valid):
        assert is_valid_identifier(text) is valid


class TestEmbedContext:
    """EmbedContext derives every shared name from package, name, namespace."""

    def test_derived_properties(self, context):
        assert context.toc_identifier == "policy_files"
        assert context.header_guard == "sandboxed_api_sandbox2_policy_files_H_"
        assert context.package_name == "sandboxed_api/sandbox2/policy-files"
        assert context.create_function == "policy_files_create"
        assert context.size_function == "policy_files_size"
        assert context.has_namespace is True

    def test_empty_namespace_and_package(self):
        ctx = EmbedContext(package="", name="res", namespace="")
        assert ctx.has_namespace is False
        assert ctx.package_name == "res"

    def test_is_immutable(self, context):
        with pytest.raises(AttributeError):
            context.name = "other"


class TestTableOfContents:
    """Ordered records plus exactly one terminal sentinel."""

    def _record(self, name, length):
        return FileRecord(
            original_name=name,
            identifier=data_identifier(name),
            byte_length=length,
            source_path="/in/" + name,
        )

    def test_entries_end_with_single_sentinel(self):
        toc = TableOfContents()
        toc.append(self._record("a.bin", 2))
        toc.append(self._record("b.txt", 5))

        entries = list(toc.entries())
        assert len(entries) == 3
        assert entries[-1] is SENTINEL
        assert sum(1 for e in entries if e.is_sentinel) == 1
        assert toc.size == 2
        assert len(toc) == 2

    def test_sentinel_shape(self):
        assert SENTINEL.original_name is None
        assert SENTINEL.identifier is None
        assert SENTINEL.byte_length == 0
        assert SENTINEL.is_sentinel

    def test_empty_toc_has_only_sentinel(self):
        toc = TableOfContents()
        assert list(toc.entries()) == [SENTINEL]
        assert toc.size == 0

    def test_preserves_insertion_order(self):
        toc = TableOfContents()
        for name in ["c.bin", "a.bin", "b.bin"]:
            toc.append(self._record(name, 1))
        assert [r.original_name for r in toc.records] == ["c.bin", "a.bin", "b.bin"]

    def test_append_keeps_duplicates_for_the_caller_to_reject(self):
        toc = TableOfContents()
        toc.append(self._record("a-b.bin", 1))
        toc.append(self._record("a_b.bin", 1))
        assert toc.size == 2
        assert toc.find("ka_b_bin").original_name == "a-b.bin"

    def test_find(self):
        toc = TableOfContents()
        record = self._record("a.bin", 2)
        toc.append(record)
        assert toc.find("ka_bin") is record
        assert toc.find("kmissing") is None

    def test_records_are_frozen(self):
        record = self._record("a.bin", 2)
        with pytest.raises(AttributeError):
            record.byte_length = 3
