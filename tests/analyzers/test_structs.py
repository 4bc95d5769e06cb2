"""Tests for the tree-sitter struct counter."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from tagcount.analyzers.structs import StructCounter, walk
from tagcount.models import Counts


def _count(source: str) -> Counts:
    return StructCounter().count_source(textwrap.dedent(source).lstrip("\n").encode("utf-8"))


def test_file_without_structs_counts_nothing() -> None:
    counts = _count(
        """
        package plain

        func add(a, b int) int {
        	return a + b
        }
        """
    )
    assert counts == Counts(total=0, tagged=0)


def test_tagged_struct_and_empty_struct() -> None:
    counts = _count(
        """
        package a

        type Tagged struct {
        	Field1 string `json:"field1"`
        }

        type Marker struct{}
        """
    )
    assert counts == Counts(total=1, tagged=1)


def test_untagged_structs_count_towards_total_only() -> None:
    counts = _count(
        """
        package b

        type First struct {
        	A int
        	B string
        }

        type Second struct {
        	C float64
        	D []byte
        }
        """
    )
    assert counts == Counts(total=2, tagged=0)


def test_many_tags_count_the_same_as_one() -> None:
    one = _count(
        """
        package c

        type One struct {
        	A int `json:"a"`
        	B int
        }
        """
    )
    many = _count(
        """
        package c

        type Many struct {
        	A int `json:"a"`
        	B int `json:"b" yaml:"b"`
        	C int "plain"
        }
        """
    )
    assert one == many == Counts(total=1, tagged=1)


def test_nested_and_anonymous_structs_are_counted() -> None:
    counts = _count(
        """
        package nested

        type Outer struct {
        	Inner struct {
        		A int `xml:"a"`
        	}
        	B int
        }

        var value = struct{ X int }{X: 1}

        func build() {
        	type local struct {
        		y string
        	}
        	_ = local{}
        }
        """
    )
    # Outer has no tag of its own; only its anonymous Inner struct is tagged.
    assert counts == Counts(total=4, tagged=1)


def test_comment_only_struct_is_empty() -> None:
    counts = _count(
        """
        package d

        type Nothing struct {
        	// reserved
        }
        """
    )
    assert counts == Counts()


def test_grouped_names_and_embedded_fields() -> None:
    counts = _count(
        """
        package e

        import "io"

        type Pair struct {
        	X, Y int
        }

        type Wrapped struct {
        	io.Reader `json:"-"`
        }
        """
    )
    assert counts == Counts(total=2, tagged=1)


def test_malformed_source_counts_nothing() -> None:
    counts = _count(
        """
        package broken

        type Half struct {
        	A int `json:"a"`
        """
    )
    assert counts == Counts()


def test_count_reads_file(tmp_path: Path) -> None:
    path = tmp_path / "model.go"
    path.write_text(
        'package model\n\ntype User struct {\n\tName string `db:"name"`\n}\n',
        encoding="utf-8",
    )
    assert StructCounter().count(path) == Counts(total=1, tagged=1)


def test_count_missing_file_counts_nothing(tmp_path: Path) -> None:
    assert StructCounter().count(tmp_path / "missing.go") == Counts()


def test_counter_reuses_parser_across_files() -> None:
    counter = StructCounter()
    first = counter.count_source(b"package a\n\ntype A struct{ X int }\n")
    second = counter.count_source(b"package b\n\ntype B struct{ Y int `t:\"y\"` }\n")
    assert first + second == Counts(total=2, tagged=1)


@pytest.mark.parametrize(
    "source",
    [
        b"package p\n",
        b"package p\n\ntype S struct{}\n",
        b"package p\n\ntype S struct{ A int }\n",
        b"package p\n\ntype S struct{ A int `k:\"v\"`; B struct{ C int `k:\"v\"` } }\n",
    ],
)
def test_tagged_never_exceeds_total(source: bytes) -> None:
    counts = StructCounter().count_source(source)
    assert counts.tagged <= counts.total


def test_walk_stops_descending_when_visit_returns_false() -> None:
    tree = StructCounter()._get_parser().parse(b"package p\n\ntype S struct{ A struct{ B int } }\n")
    seen: list[str] = []

    def visit(node) -> bool:  # type: ignore[no-untyped-def]
        seen.append(node.type)
        return node.type != "type_declaration"

    walk(tree.root_node, visit)
    assert "type_declaration" in seen
    assert "struct_type" not in seen


def test_invalid_utf8_counts_nothing() -> None:
    source = b'package p\n\n// \xff\xfe\ntype S struct{ A int `j:"\xff"` }\n'
    assert StructCounter().count_source(source) == Counts()


def test_nul_byte_counts_nothing() -> None:
    source = b"package p\n\ntype S struct{ A int `j:\"a\"` }\n\x00"
    assert StructCounter().count_source(source) == Counts()
