"""
bcrypt credential hasher.

The work factor (log2 rounds) is fixed per instance; verification reads
the cost from the stored hash, so raising the factor keeps old hashes valid.
"""

import bcrypt

from .interfaces import ICredentialHasher

# bcrypt ignores everything past 72 bytes; newer releases refuse longer input
BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptHasher(ICredentialHasher):
    """Hash and verify passwords with bcrypt."""

    def __init__(self, rounds: int = 10):
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(rounds=self._rounds)).decode("utf-8")

    def verify(self, plaintext: str, hashed: str) -> bool:
        """Return False for a mismatch or a malformed stored hash."""
        if not plaintext or not hashed:
            return False
        try:
            return bcrypt.checkpw(_encode(plaintext), hashed.encode("utf-8"))
        except ValueError:
            return False
