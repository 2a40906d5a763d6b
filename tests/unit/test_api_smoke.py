"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok
2. POST /tree stores a tree and returns its full log
3. GET /tree/root returns 404 NOT_PRESENT for an empty tree
4. POST /proof returns siblings; bad index returns an empty list
5. POST /verify returns valid=true/false; bad hex is a 400
6. A broken merkle.json falls back to defaults
"""

import logging

import pytest
from fastapi.testclient import TestClient

from api import deps
from api.app import app
from core.config.runtime import RuntimeConfig
from core.crypto.hashing import sha256, to_hex


# Create test client
client = TestClient(app)


def leaves(n: int) -> list[str]:
    return [str(i) for i in range(1, n + 1)]


@pytest.fixture(autouse=True)
def fresh_state():
    """Each test starts with an empty stored tree and default config."""
    deps.reset_state(RuntimeConfig())
    yield
    deps.reset_state()


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    """GET /health and GET /."""

    def test_health(self):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "service": "merkle-engine-api", "version": "v1"}

    def test_root_path(self):
        assert client.get("/").json()["ok"] is True


# =============================================================================
# Tree
# =============================================================================

class TestHash:
    """POST /hash."""

    def test_hash_utf8(self):
        response = client.post("/hash", json={"data": "1"})

        assert response.status_code == 200
        data = response.json()
        assert data["hash_algorithm"] == "sha256"
        assert data["hash"] == to_hex(sha256(b"1"))

    def test_hash_hex(self):
        response = client.post("/hash", json={"data": "0x0102", "encoding": "hex"})

        assert response.json()["hash"] == to_hex(sha256(b"\x01\x02"))

    def test_hash_bad_hex(self):
        response = client.post("/hash", json={"data": "zz", "encoding": "hex"})

        assert response.status_code == 400
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "INVALID_HEX"

    def test_hash_unknown_encoding_is_422(self):
        response = client.post("/hash", json={"data": "1", "encoding": "base64"})

        assert response.status_code == 422


class TestTree:
    """POST /tree, GET /tree, GET /tree/root."""

    def test_build_eight_leaves(self):
        response = client.post("/tree", json={"leaves": leaves(8)})

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["leaf_count"] == 8
        assert len(data["hashes"]) == 15
        assert data["hashes"][0] == to_hex(sha256(b"1"))
        assert data["root"] == data["hashes"][14]

    def test_get_tree_returns_stored(self):
        built = client.post("/tree", json={"leaves": leaves(7)}).json()

        assert client.get("/tree").json() == built

    def test_get_root(self):
        built = client.post("/tree", json={"leaves": leaves(3)}).json()
        response = client.get("/tree/root")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "root": built["root"]}

    def test_root_of_empty_tree_is_404(self):
        response = client.get("/tree/root")

        assert response.status_code == 404
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "NOT_PRESENT"

    def test_empty_build_clears_tree(self):
        client.post("/tree", json={"leaves": leaves(4)})
        data = client.post("/tree", json={"leaves": []}).json()

        assert data["root"] is None
        assert data["hashes"] == []
        assert client.get("/tree/root").status_code == 404

    def test_configured_algorithm(self):
        deps.reset_state(RuntimeConfig.from_dict({"merkle": {"hash_algorithm": "blake2b"}}))

        data = client.post("/tree", json={"leaves": leaves(2)}).json()

        assert data["hash_algorithm"] == "blake2b"

    def test_unsupported_algorithm_is_400(self):
        deps.reset_state(RuntimeConfig.from_dict({"merkle": {"hash_algorithm": "md5"}}))

        response = client.post("/tree", json={"leaves": leaves(2)})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "UNSUPPORTED_HASH_ALGORITHM"


# =============================================================================
# Proofs
# =============================================================================

class TestProofAndVerify:
    """POST /proof and POST /verify."""

    def test_proof_verifies(self):
        client.post("/tree", json={"leaves": leaves(7)})
        root = client.get("/tree/root").json()["root"]

        proof = client.post("/proof", json={"index": 3, "leaf_count": 7}).json()
        assert len(proof["siblings"]) == 3

        response = client.post("/verify", json={
            "proof": proof["siblings"],
            "root": root,
            "leaf": to_hex(sha256(b"4")),
            "index": 3,
        })
        assert response.status_code == 200
        assert response.json() == {"ok": True, "valid": True}

    def test_wrong_leaf_is_invalid_not_error(self):
        client.post("/tree", json={"leaves": leaves(7)})
        root = client.get("/tree/root").json()["root"]
        proof = client.post("/proof", json={"index": 3, "leaf_count": 7}).json()

        response = client.post("/verify", json={
            "proof": proof["siblings"],
            "root": root,
            "leaf": to_hex(sha256(b"5")),
            "index": 3,
        })
        assert response.status_code == 200
        assert response.json()["valid"] is False

    def test_out_of_range_index_gives_empty_proof(self):
        client.post("/tree", json={"leaves": leaves(4)})

        response = client.post("/proof", json={"index": 9, "leaf_count": 4})

        assert response.status_code == 200
        assert response.json()["siblings"] == []

    def test_mismatched_leaf_count_gives_empty_proof(self):
        client.post("/tree", json={"leaves": leaves(8)})

        response = client.post("/proof", json={"index": 0, "leaf_count": 3})

        assert response.json()["siblings"] == []

    def test_verify_bad_hex_is_400(self):
        response = client.post("/verify", json={
            "proof": [],
            "root": "not-hex",
            "leaf": to_hex(sha256(b"1")),
            "index": 0,
        })

        assert response.status_code == 400
        body = response.json()
        assert body["error"]["code"] == "INVALID_HEX"
        assert body["error"]["details"] == {"field": "root"}

    def test_single_leaf_verifies_with_empty_proof(self):
        client.post("/tree", json={"leaves": ["only"]})
        root = client.get("/tree/root").json()["root"]

        response = client.post("/verify", json={
            "proof": [],
            "root": root,
            "leaf": to_hex(sha256(b"only")),
            "index": 0,
        })
        assert response.json()["valid"] is True


# =============================================================================
# Configuration
# =============================================================================

class TestConfigFallback:
    """A broken config file in the working directory does not take the API down."""

    @pytest.mark.parametrize("content", [
        "{not json",
        '{"merkle": {"hash": "sha256"}}',
        "[1, 2]",
    ])
    def test_bad_config_file_uses_defaults(self, tmp_path, monkeypatch, caplog, content):
        (tmp_path / "merkle.json").write_text(content)
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("MERKLE_HASH_ALGORITHM", raising=False)
        deps.reset_state()

        with caplog.at_level(logging.WARNING, logger="api.deps"):
            assert client.get("/health").status_code == 200
            assert deps.get_runtime_config().merkle.hash_algorithm == "sha256"
        assert "Failed to parse config file" in caplog.text

        response = client.post("/tree", json={"leaves": leaves(2)})
        assert response.status_code == 200
        assert response.json()["leaf_count"] == 2

    def test_unknown_configured_leaf_encoding(self):
        deps.reset_state(RuntimeConfig.from_dict({"merkle": {"leaf_encoding": "base64"}}))

        response = client.post("/tree", json={"leaves": leaves(2)})

        assert response.status_code == 500
        body = response.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "UNSUPPORTED_LEAF_ENCODING"
        assert body["error"]["details"]["encoding"] == "base64"

    def test_request_encoding_overrides_config(self):
        deps.reset_state(RuntimeConfig.from_dict({"merkle": {"leaf_encoding": "base64"}}))

        response = client.post("/tree", json={"leaves": ["0x01"], "encoding": "hex"})

        assert response.status_code == 200
        assert response.json()["hashes"][0] == to_hex(sha256(b"\x01"))
