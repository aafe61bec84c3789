from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from core.config import settings
from schemas.auth_schema import SessionClaims


class InvalidSessionToken(Exception):
    pass


def create_session_token(user_id: int, email: str, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=settings.JWT_EXPIRES_DAYS))
    to_encode = SessionClaims(user_id=user_id, email=email).model_dump(by_alias=True)
    to_encode["exp"] = int(expire.timestamp())
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_session_token(token: str) -> SessionClaims:
    """Verify signature and expiry; raises ``InvalidSessionToken`` on any failure."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        return SessionClaims.model_validate(payload)
    except (JWTError, PydanticValidationError) as exc:
        raise InvalidSessionToken(str(exc)) from exc
