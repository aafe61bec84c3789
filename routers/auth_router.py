import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.auth import get_current_session
from core.database import database_errors, get_db
from core.errors import NotFound, ValidationError
from core.google import verify_google_id_token
from core.security import create_session_token
from crud.user_crud import get_user, upsert_google_user
from schemas.auth_schema import GoogleSignInRequest, MeResponse, SessionClaims, SignInResponse
from schemas.user_schema import UserPublic

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.post("/google", response_model=SignInResponse)
def google_sign_in(body: GoogleSignInRequest, db: Session = Depends(get_db)):
    """
    Verify a Google ID token, upsert the user keyed on the Google subject,
    and issue a 7-day session token.
    """
    if not body.id_token:
        raise ValidationError(error="ID token is required")

    identity = verify_google_id_token(body.id_token)

    with database_errors("Authentication failed"):
        user = upsert_google_user(db, identity)
    logger.info("User %s signed in with Google", user.id)

    token = create_session_token(user.id, user.email)
    return SignInResponse(token=token, user=UserPublic.model_validate(user))


@router.get("/me", response_model=MeResponse)
def get_me(claims: SessionClaims = Depends(get_current_session), db: Session = Depends(get_db)):
    with database_errors("Failed to fetch user"):
        user = get_user(db, claims.user_id)
    if not user:
        raise NotFound(error="User not found")
    return MeResponse(user=UserPublic.model_validate(user))
