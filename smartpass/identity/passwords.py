"""
Name: Password Hashing (bcrypt)

Responsibilities:
  - Hash secrets with a configurable bcrypt cost
  - Compare plaintext against stored hashes without raising
"""

import bcrypt

from ..logger import logger

# R: bcrypt only looks at the first 72 bytes of the input
_BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class BcryptPasswordHasher:
    def __init__(self, rounds: int = 10):
        self._rounds = rounds
        self._dummy_hash: bytes | None = None

    def hash(self, plaintext: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(plaintext), salt).decode("utf-8")

    def compare(self, plaintext: str, hashed: str) -> bool:
        if not plaintext or not hashed:
            return False
        try:
            return bcrypt.checkpw(_encode(plaintext), hashed.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False

    def dummy_compare(self, plaintext: str) -> None:
        """R: Burn one comparison at the configured cost (unknown accounts)."""
        if self._dummy_hash is None:
            self._dummy_hash = bcrypt.hashpw(
                b"smartpass-dummy", bcrypt.gensalt(rounds=self._rounds)
            )
        bcrypt.checkpw(_encode(plaintext or ""), self._dummy_hash)
