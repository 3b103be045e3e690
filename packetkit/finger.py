"""Packet fingerprints derived from a shared token."""

from __future__ import annotations

import hashlib

FINGER_LEN = 12


class Finger:
    """Computes 12-byte fingerprints keyed by the SHA-256 of a token."""

    def __init__(self, token: str) -> None:
        self.hash = hashlib.sha256(token.encode("utf-8")).digest()

    def calculate_finger(self, nonce: bytes, secret_body: bytes) -> bytes:
        """Return the last 12 bytes of SHA-256(nonce + secret_body + token hash)."""
        hasher = hashlib.sha256()
        hasher.update(bytes(nonce))
        hasher.update(bytes(secret_body))
        hasher.update(self.hash)
        return hasher.digest()[-FINGER_LEN:]