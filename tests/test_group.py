"""Tests for grouping/sorting and the end-to-end generation pipeline."""

from __future__ import annotations

import pytest

from sigtable.group import GeneratedTables, generate_tables, group
from sigtable.scopes import Scope, scope_sort_key
from tests.conftest import READER_SRC, module_loader

ORDER = ["", "io", "os", "bytes", "collections.abc"]


class TestGroup:
    def test_groups_follow_scope_order(self):
        table = {
            "s1": "collections.abc.Sized",
            "s2": "bytes.Buffer",
            "s3": "io.Reader",
            "s4": "error",
        }
        assert group(table, ORDER) == [
            ("s4", "error"),
            ("s3", "io.Reader"),
            ("s2", "bytes.Buffer"),
            ("s1", "collections.abc.Sized"),
        ]

    def test_alphabetical_within_scope(self):
        table = {"a": "io.Writer", "b": "io.Closer", "c": "io.Reader"}
        assert [q for _, q in group(table, ORDER)] == ["io.Closer", "io.Reader", "io.Writer"]

    def test_scope_order_argument_is_sorted(self):
        table = {"a": "bytes.Buffer", "b": "io.Reader"}
        assert group(table, ["bytes", "io"]) == [("b", "io.Reader"), ("a", "bytes.Buffer")]

    def test_universe_first(self):
        table = {"a": "aaa.X", "b": "error"}
        assert group(table, ["aaa", ""])[0] == ("b", "error")

    def test_unknown_owner_rejected(self):
        with pytest.raises(ValueError, match="nowhere.X"):
            group({"a": "nowhere.X"}, ORDER)

    def test_pure_and_idempotent(self):
        table = {"a": "io.Writer", "b": "os.PathLike", "c": "io.Reader"}
        snapshot = dict(table)
        assert group(table, ORDER) == group(table, ORDER)
        assert table == snapshot

    def test_empty(self):
        assert group({}, ORDER) == []


class TestGenerateTables:
    def test_scenario(self):
        loader = module_loader({
            "": "",
            "bytes": READER_SRC.format(name="ByteReader") + "\nclass Extra(Protocol):\n    def size(self) -> int: ...\n",
            "io": READER_SRC.format(name="Reader"),
        })
        scopes = ["", "bytes", "io", Scope("io.internal", private=True)]
        tables = generate_tables(scopes, loader)
        assert tables == GeneratedTables(
            scopes=("", "io", "bytes", "io.internal"),
            ifaces=(
                ("read(int) -> bytes", "io.Reader"),
                ("size() -> int", "bytes.Extra"),
            ),
            funcs=(),
        )

    def test_scope_ordering_invariant(self):
        sources = {
            path: READER_SRC.format(name="R") + f"\nclass Only(Protocol):\n    def only_{i}(self) -> None: ...\n"
            for i, path in enumerate(["zz", "a", "mmm", "b"])
        }
        tables = generate_tables(list(sources), module_loader(sources))
        owners = [q.rpartition(".")[0] for _, q in tables.ifaces]
        keys = [scope_sort_key(o) for o in owners]
        assert keys == sorted(keys)
        for (_, q1), (_, q2) in zip(tables.ifaces, tables.ifaces[1:]):
            if q1.rpartition(".")[0] == q2.rpartition(".")[0]:
                assert q1 < q2

    def test_byte_identical_runs(self):
        sources = {"io": READER_SRC.format(name="Reader"), "": ""}
        first = generate_tables(["io", ""], module_loader(sources))
        second = generate_tables(["", "io"], module_loader(sources))
        assert first == second
