from typing import Optional

from fastapi import Header, Request

from core.errors import Forbidden, Unauthorized
from core.security import InvalidSessionToken, decode_session_token
from schemas.auth_schema import SessionClaims


def _extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2:
        return parts[1]
    return None


def get_current_session(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> SessionClaims:
    """Require a valid session token and expose its identity on ``request.state``.

    Ownership of resources is not checked here.
    """
    token = _extract_bearer_token(authorization)
    if not token:
        raise Unauthorized()

    try:
        claims = decode_session_token(token)
    except InvalidSessionToken:
        raise Forbidden()

    request.state.user_id = claims.user_id
    request.state.user_email = claims.email
    return claims
