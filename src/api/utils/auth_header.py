"""
Authorization header parsing.
"""

from typing import Optional

BEARER_PREFIX = "Bearer "


def extract_bearer_token(header: Optional[str]) -> Optional[str]:
    """
    Extract the token from an Authorization header value.

    Only the exact literal "Bearer " (capital B, one space) is accepted;
    "bearer x", "Bearer  x" with a doubled space, or any other scheme yields
    None. An empty token after the prefix also yields None.
    """
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):]
    if not token or token.startswith(" "):
        return None
    return token
