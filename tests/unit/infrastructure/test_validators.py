"""
Unit tests for payment proof validation.
"""

import pytest

from backoffice.config import Settings
from backoffice.domain.models.movement import ProofFile
from backoffice.infrastructure.validation.validators import ProofFileRejected, ProofFileValidator


class TestProofFileValidator:
    """Test cases for ProofFileValidator."""

    def setup_method(self):
        """Set up test fixtures."""
        self.validator = ProofFileValidator(Settings(max_upload_size_mb=1))

    @pytest.mark.parametrize("name,mime", [
        ("receipt.pdf", "application/pdf"),
        ("photo.JPG", None),
        ("scan.jpeg", "image/jpeg"),
        ("capture.png", "image/png"),
    ])
    def test_accepted_files(self, name, mime):
        """Test the allowed types pass."""
        proof = ProofFile(name, b"data", mime)
        assert self.validator.validate(proof) is proof

    def test_empty_file(self):
        """Test empty content is rejected."""
        with pytest.raises(ProofFileRejected, match="File content is empty"):
            self.validator.validate(ProofFile("receipt.pdf", b""))

    def test_size_limit(self):
        """Test files above the limit are rejected."""
        with pytest.raises(ProofFileRejected, match="Maximum size: 1.0MB"):
            self.validator.validate(ProofFile("receipt.pdf", b"x" * (1024 * 1024 + 1)))

    def test_extension(self):
        """Test disallowed extensions are rejected."""
        with pytest.raises(ProofFileRejected, match="File type not allowed: gif"):
            self.validator.validate(ProofFile("receipt.gif", b"GIF89a"))

    def test_mime_type_mismatch(self):
        """Test a declared MIME type outside the list is rejected."""
        with pytest.raises(ProofFileRejected, match="text/html"):
            self.validator.validate(ProofFile("receipt.pdf", b"<html>", "text/html"))

    def test_path_traversal(self):
        """Test file names escaping the directory are rejected."""
        with pytest.raises(ProofFileRejected, match="Invalid file name"):
            self.validator.validate(ProofFile("../../etc/receipt.pdf", b"data"))

    def test_rejection_is_a_validation_error(self):
        """Test rejections carry the proof_file field."""
        with pytest.raises(ProofFileRejected) as exc_info:
            self.validator.validate(ProofFile("receipt", b"data"))

        assert exc_info.value.code == "VALIDATION_ERROR"
        assert exc_info.value.field == "proof_file"
