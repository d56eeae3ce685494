from datetime import datetime, timezone
from typing import Optional

from jose import jwt, JWTError


def decode_token_claims(token: str) -> Optional[dict]:
    """Read the claims of a bearer token without verifying its signature.

    The client never holds the signing secret, so this is only good for
    reading ``exp``; the API still verifies every request.
    """
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        return None

def is_token_expired(token: str, now: Optional[datetime] = None) -> bool:
    claims = decode_token_claims(token)
    if claims is None:
        return True

    exp = claims.get("exp")
    if exp is None:
        return False

    now = now or datetime.now(timezone.utc)
    try:
        return float(exp) < now.timestamp()
    except (TypeError, ValueError):
        return True
