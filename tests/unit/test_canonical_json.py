"""
Schemas & Canonicalization
File: tests/unit/test_canonical_json.py

Purpose: Unit tests for canonical JSON serialization.
These tests ensure saved trees and proofs serialize to the same bytes
across runs.
"""

import json

import pytest
from pydantic import BaseModel

from core.merkle import MerkleTree, TreeSnapshot
from core.schemas import (
    CanonicalizationException,
    canonicalize_value,
    dumps_canonical,
)


class Sample(BaseModel):
    name: str
    note: str | None = None
    digest: str = "0x00"


class TestDumpsCanonical:
    """Tests for dumps_canonical()."""

    def test_sorted_keys_no_whitespace(self):
        assert dumps_canonical({"b": 2, "a": 1}) == '{"a":1,"b":2}'

    def test_key_order_does_not_matter(self):
        assert dumps_canonical({"x": 1, "y": [1, 2]}) == dumps_canonical({"y": [1, 2], "x": 1})

    def test_list_order_preserved(self):
        assert dumps_canonical([3, 1, 2]) == "[3,1,2]"

    def test_none_values_dropped(self):
        assert dumps_canonical({"a": None, "b": 1}) == '{"b":1}'

    def test_bytes_as_hex(self):
        assert dumps_canonical({"h": b"\x01\xff"}) == '{"h":"0x01ff"}'

    def test_unicode_not_escaped(self):
        assert dumps_canonical({"s": "héllo"}) == '{"s":"héllo"}'

    def test_pydantic_model(self):
        assert dumps_canonical(Sample(name="tree")) == '{"digest":"0x00","name":"tree"}'

    def test_snapshot_parses_back(self, tree_1_to_7):
        snapshot = TreeSnapshot.from_tree(tree_1_to_7)

        assert TreeSnapshot.model_validate(json.loads(dumps_canonical(snapshot))) == snapshot

    def test_empty_snapshot(self):
        text = dumps_canonical(TreeSnapshot.from_tree(MerkleTree()))

        assert json.loads(text)["hashes"] == []


class TestCanonicalizationErrors:
    """Values that have no canonical form."""

    def test_float_rejected(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            dumps_canonical({"x": 1.5})

        assert exc_info.value.details == {"path": "x", "type": "float"}

    def test_unsupported_type(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            canonicalize_value({"s": {1, 2}})

        assert exc_info.value.details["path"] == "s"
        assert exc_info.value.details["type"] == "set"

    def test_nested_path_reported(self):
        with pytest.raises(CanonicalizationException) as exc_info:
            canonicalize_value({"a": [1, object()]})

        assert exc_info.value.details["path"] == "a[1]"
