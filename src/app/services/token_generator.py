"""
Opaque Token Generator

Refresh tokens are random strings with no structure; all meaning lives in
the session row that stores their digest.
"""

import hashlib
import secrets
from typing import Callable

MIN_TOKEN_BYTES = 32


class EntropyUnavailable(Exception):
    """The operating system could not supply random bytes"""


def hash_token(token: str) -> str:
    """SHA-256 hex digest under which a refresh token is stored"""
    return hashlib.sha256(token.encode()).hexdigest()


class OpaqueTokenGenerator:
    """
    Produces hex-encoded refresh tokens from a CSPRNG.

    Entropy failures are fatal to the calling operation and are never retried.
    """

    def __init__(
        self,
        token_bytes: int = MIN_TOKEN_BYTES,
        entropy_source: Callable[[int], bytes] = secrets.token_bytes,
    ):
        if token_bytes < MIN_TOKEN_BYTES:
            raise ValueError(
                f"Refresh tokens need at least {MIN_TOKEN_BYTES} bytes of entropy"
            )
        self.token_bytes = token_bytes
        self.entropy_source = entropy_source

    def generate(self) -> str:
        try:
            raw = self.entropy_source(self.token_bytes)
        except (OSError, NotImplementedError) as exc:
            raise EntropyUnavailable("Random source unavailable") from exc

        if len(raw) != self.token_bytes:
            raise EntropyUnavailable(
                f"Random source returned {len(raw)} of {self.token_bytes} bytes"
            )
        return raw.hex()
