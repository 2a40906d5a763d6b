"""
Snapshot & IO Tests
Tests for core/merkle/snapshot.py and core/merkle/io.py

Tests:
- TreeSnapshot / ProofBundle validation (hex, algorithm, log length, version)
- save/load of trees and proofs through canonical JSON files
- SnapshotException for missing, malformed and invalid files
"""
import json

import pytest
from pydantic import ValidationError

from core.crypto.hashing import to_hex
from core.merkle import (
    MerkleTree,
    ProofBundle,
    TreeSnapshot,
    load_proof,
    load_snapshot,
    load_tree,
    save_proof,
    save_tree,
)
from core.merkle.io import dump_json
from core.schemas.errors import ErrorCodes, SnapshotException


ZERO_HASH = "0x" + "00" * 32


class TestTreeSnapshot:
    """Tests for TreeSnapshot."""

    def test_from_tree(self, tree_1_to_7):
        snapshot = TreeSnapshot.from_tree(tree_1_to_7)

        assert snapshot.schema_version == "v1"
        assert snapshot.hash_algorithm == "sha256"
        assert snapshot.leaf_count == 7
        assert len(snapshot.hashes) == 15
        assert snapshot.root == to_hex(tree_1_to_7.get_root())

    def test_empty_snapshot(self):
        snapshot = TreeSnapshot.from_tree(MerkleTree())

        assert snapshot.hashes == []
        assert snapshot.root is None
        assert snapshot.to_tree().is_empty

    def test_algorithm_normalized(self):
        snapshot = TreeSnapshot(hash_algorithm="SHA3-256", leaf_count=1, hashes=[ZERO_HASH])

        assert snapshot.hash_algorithm == "sha3_256"

    def test_hashes_lowercased(self):
        upper = "0x" + "AB" * 32
        snapshot = TreeSnapshot(hash_algorithm="sha256", leaf_count=1, hashes=[upper])

        assert snapshot.hashes == ["0x" + "ab" * 32]

    def test_unknown_algorithm_rejected(self):
        with pytest.raises(ValidationError, match="Unsupported hash algorithm"):
            TreeSnapshot(hash_algorithm="md5", leaf_count=0, hashes=[])

    def test_bad_hex_rejected(self):
        with pytest.raises(ValidationError, match="32-byte hex"):
            TreeSnapshot(hash_algorithm="sha256", leaf_count=1, hashes=["0x1234"])

    def test_log_length_checked(self):
        with pytest.raises(ValidationError, match="require 3 hashes"):
            TreeSnapshot(hash_algorithm="sha256", leaf_count=2, hashes=[ZERO_HASH])

    def test_schema_version_checked(self):
        with pytest.raises(ValidationError, match="Unsupported schema version"):
            TreeSnapshot(schema_version="v9", hash_algorithm="sha256", leaf_count=0)

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            TreeSnapshot(hash_algorithm="sha256", leaf_count=0, colour="blue")

    def test_to_tree_round_trip(self, tree_1_to_7):
        restored = TreeSnapshot.from_tree(tree_1_to_7).to_tree()

        assert restored.hashes == tree_1_to_7.hashes
        assert restored.leaf_count == 7


class TestProofBundle:
    """Tests for ProofBundle."""

    def test_from_proof_verifies(self, tree_1_to_7):
        bundle = ProofBundle.from_proof(tree_1_to_7.prove(3), "sha256", 7)

        assert bundle.index == 3
        assert len(bundle.siblings) == 3
        assert bundle.verify()

    def test_verify_against_other_root(self, tree_1_to_7, tree_1_to_8):
        bundle = ProofBundle.from_proof(tree_1_to_7.prove(3), "sha256", 7)

        assert not bundle.verify(tree_1_to_8.get_root())

    def test_negative_index_rejected(self):
        with pytest.raises(ValidationError):
            ProofBundle(
                hash_algorithm="sha256",
                leaf_count=1,
                index=-1,
                leaf=ZERO_HASH,
                root=ZERO_HASH,
            )

    def test_bad_sibling_rejected(self):
        with pytest.raises(ValidationError, match="siblings\\[0\\]"):
            ProofBundle(
                hash_algorithm="sha256",
                leaf_count=2,
                index=0,
                leaf=ZERO_HASH,
                siblings=["nothex"],
                root=ZERO_HASH,
            )


class TestTreeFiles:
    """Tests for save_tree / load_tree."""

    def test_save_and_load(self, tree_1_to_7, tmp_path):
        path = save_tree(tree_1_to_7, tmp_path / "trees" / "tree.json")

        assert path.exists()
        restored = load_tree(path)
        assert restored.hashes == tree_1_to_7.hashes
        assert restored.hash_algorithm == "sha256"

    def test_file_is_canonical_json(self, tree_1_to_8, tmp_path):
        path = save_tree(tree_1_to_8, tmp_path / "tree.json")
        text = path.read_text(encoding="utf-8")

        assert text == dump_json(TreeSnapshot.from_tree(tree_1_to_8))
        assert " " not in text
        assert list(json.loads(text)) == sorted(json.loads(text))

    def test_same_tree_same_bytes(self, leaves_1_to_8, tmp_path):
        a = MerkleTree()
        a.build_tree(leaves_1_to_8)
        b = MerkleTree()
        b.build_tree(leaves_1_to_8)

        path_a = save_tree(a, tmp_path / "a.json")
        path_b = save_tree(b, tmp_path / "b.json")

        assert path_a.read_bytes() == path_b.read_bytes()

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotException) as exc_info:
            load_tree(tmp_path / "missing.json")

        assert exc_info.value.code == ErrorCodes.SNAPSHOT_INVALID
        assert "missing.json" in exc_info.value.details["path"]

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(SnapshotException, match="Invalid JSON"):
            load_snapshot(path)

    def test_invalid_snapshot(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps({"hash_algorithm": "sha256", "leaf_count": 2, "hashes": []}),
            encoding="utf-8",
        )

        with pytest.raises(SnapshotException, match="Invalid TreeSnapshot") as exc_info:
            load_snapshot(path)
        assert exc_info.value.details["errors"]


class TestProofFiles:
    """Tests for save_proof / load_proof."""

    def test_save_and_load(self, tree_1_to_8, tmp_path):
        bundle = ProofBundle.from_proof(tree_1_to_8.prove(6), "sha256", 8)
        path = save_proof(bundle, tmp_path / "proof.json")

        loaded = load_proof(path)
        assert loaded == bundle
        assert loaded.verify()

    def test_tree_file_is_not_a_proof(self, tree_1_to_8, tmp_path):
        path = save_tree(tree_1_to_8, tmp_path / "tree.json")

        with pytest.raises(SnapshotException, match="Invalid ProofBundle"):
            load_proof(path)
