"""
Request-scoped dependencies.

`get_current_owner` is the only source of the owner id handed to services;
no route reads an owner from the path, query or body.
"""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from waybill.app.core.exceptions import AuthenticationError
from waybill.app.core.jwt import decode_access_token, owner_id_from_claims

security = HTTPBearer(auto_error=False)


async def get_current_owner(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Resolve the caller's owner id from the bearer token.

    Raises:
        AuthenticationError: 401 when the header is missing, the token does
            not verify, or it carries no `user_id` claim
    """
    if credentials is None:
        raise AuthenticationError("Missing bearer token")

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise AuthenticationError("Could not validate credentials")

    owner_id = owner_id_from_claims(claims)
    if owner_id is None:
        raise AuthenticationError("Token carries no owner id")
    return owner_id
