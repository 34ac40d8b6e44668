"""
JWT helpers.

Tokens are issued by the identity service that shares `secret_key`. This
service only decodes them: the `user_id` claim is the owner (tenant) id that
scopes every read and write. `create_access_token` is kept for tooling and
tests that need a valid bearer token.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from waybill.app.core.config import settings
from waybill.app.domain.base import OWNER_ID_LENGTH

OWNER_CLAIM = "user_id"


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign `data` with an expiry.

    Args:
        data: Claims to encode, usually `sub` and `user_id`
        expires_delta: Lifetime; defaults to `access_token_expire_minutes`
    """
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {**data, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verified claims, or None for a bad signature, an expired or malformed token."""
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None


def owner_id_from_claims(claims: Dict[str, Any]) -> Optional[str]:
    """
    The owner id as a string; numeric ids from older issuers are accepted.
    Blank ids and ids longer than the owner column are refused.
    """
    owner_id = claims.get(OWNER_CLAIM)
    if owner_id is None or isinstance(owner_id, bool):
        return None
    owner_id = str(owner_id).strip()
    if not owner_id or len(owner_id) > OWNER_ID_LENGTH:
        return None
    return owner_id
