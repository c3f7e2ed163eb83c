"""Tests for reachable-excludes policies."""

from __future__ import annotations

import pytest

from heapwalk.core.excludes import FieldNameExcludes, ReachableExcludes


class TestFieldNameExcludes:
    def test_is_excluded(self):
        excludes = FieldNameExcludes(["java.lang.ref.Reference.referent"])
        assert excludes.is_excluded("java.lang.ref.Reference.referent")
        assert not excludes.is_excluded("java.lang.ref.Reference.next")

    def test_satisfies_protocol(self):
        assert isinstance(FieldNameExcludes(), ReachableExcludes)

    def test_from_file(self, tmp_path):
        path = tmp_path / "excludes.txt"
        path.write_text(
            "# fields the GC does not trace\n"
            "java.lang.ref.Reference.referent\n"
            "\n"
            "java.lang.ref.Finalizer.next  # queue link\n"
        )
        excludes = FieldNameExcludes.from_file(str(path))
        assert len(excludes) == 2
        assert excludes.field_names == frozenset(
            {"java.lang.ref.Reference.referent", "java.lang.ref.Finalizer.next"}
        )

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            FieldNameExcludes.from_file(str(tmp_path / "missing.txt"))
