"""
Payment proof validation.
Files that break the size or type constraints are rejected locally,
without a network call.
"""

import mimetypes
import re
from typing import Iterable, Optional

from backoffice.config import Settings, get_settings
from backoffice.domain.models.base import ValidationError
from backoffice.domain.models.movement import ProofFile


PATTERNS = {
    'path_traversal': re.compile(r'\.\./|\.\.\\'),
    'control_chars': re.compile(r'[\x00-\x1f]'),
}


class ProofFileRejected(ValidationError):
    """Raised when a proof file breaks a local upload constraint."""

    def __init__(self, message: str):
        super().__init__(message, "proof_file")


class ProofFileValidator:
    """Checks a payment proof against the configured size and type limits."""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.max_size = settings.max_upload_size_bytes
        self.allowed_extensions = set(settings.allowed_proof_extensions)
        self.allowed_mime_types = set(settings.allowed_proof_mime_types)

    def validate(self, proof: ProofFile) -> ProofFile:
        if not proof.content:
            raise ProofFileRejected("File content is empty")

        if proof.size > self.max_size:
            raise ProofFileRejected(
                f"File too large. Maximum size: {self.max_size / 1024 / 1024:.1f}MB"
            )

        name = proof.file_name or ""
        if PATTERNS['path_traversal'].search(name) or PATTERNS['control_chars'].search(name):
            raise ProofFileRejected("Invalid file name")

        if proof.extension not in self.allowed_extensions:
            raise ProofFileRejected(
                f"File type not allowed: {proof.extension or 'unknown'}. "
                f"Allowed: {self._describe(self.allowed_extensions)}"
            )

        mime_type = (proof.mime_type or mimetypes.guess_type(name)[0] or "").lower()
        if mime_type not in self.allowed_mime_types:
            raise ProofFileRejected(f"File type not allowed: {mime_type or 'unknown'}")

        return proof

    @staticmethod
    def _describe(values: Iterable[str]) -> str:
        return ", ".join(sorted(values))
