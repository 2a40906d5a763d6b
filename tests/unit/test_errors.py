"""
Error Taxonomy Tests
Tests for core/schemas/errors.py
"""
import pytest

from core.schemas.errors import (
    ErrorCodes,
    MerkleEngineException,
    MerkleError,
    NotPresentException,
    SnapshotException,
    UnsupportedHashAlgorithmException,
)


class TestExceptions:
    """Exception codes and details."""

    def test_not_present_defaults(self):
        exc = NotPresentException()

        assert isinstance(exc, MerkleEngineException)
        assert exc.code == ErrorCodes.NOT_PRESENT
        assert "empty" in str(exc)
        assert exc.retryable is False

    def test_unsupported_algorithm(self):
        exc = UnsupportedHashAlgorithmException("md5", supported=["sha256"])

        assert exc.message == "Unsupported hash algorithm: 'md5'"
        assert exc.details == {"algorithm": "md5", "supported": ["sha256"]}

    def test_snapshot_path(self):
        exc = SnapshotException("missing", path="/tmp/x.json")

        assert exc.details == {"path": "/tmp/x.json"}

    def test_repr(self):
        assert repr(NotPresentException("gone")) == (
            "NotPresentException(code='NOT_PRESENT', message='gone')"
        )


class TestErrorModel:
    """MerkleError <-> exception conversion."""

    def test_exception_to_model(self):
        model = NotPresentException().to_error_model()

        assert isinstance(model, MerkleError)
        assert model.code == ErrorCodes.NOT_PRESENT
        assert model.details == {}

    def test_model_to_exception(self):
        model = MerkleError(code=ErrorCodes.MERKLE_PROOF_INVALID, message="proof rejected", details={"i": 1})
        exc = model.to_exception()

        assert isinstance(exc, MerkleEngineException)
        assert exc.code == ErrorCodes.MERKLE_PROOF_INVALID
        assert exc.details == {"i": 1}

    def test_model_forbids_extra(self):
        with pytest.raises(ValueError):
            MerkleError(code="X", message="m", unexpected=True)
