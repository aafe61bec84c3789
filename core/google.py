"""Google ID token verification.

The tokeninfo endpoint checks the token signature and expiry on Google's side;
audience and required claims are checked here.
"""

import logging

import requests

from core.config import settings
from core.errors import AuthProviderError
from schemas.auth_schema import GoogleIdentity

logger = logging.getLogger(__name__)


def verify_google_id_token(id_token: str) -> GoogleIdentity:
    try:
        response = requests.get(
            settings.GOOGLE_TOKENINFO_URL,
            params={"id_token": id_token},
            timeout=settings.GOOGLE_TIMEOUT_SECONDS,
        )
    except requests.RequestException:
        logger.exception("Google tokeninfo request failed")
        raise AuthProviderError("Could not reach identity provider", error="Authentication failed", status_code=500)

    # tokeninfo answers 400 for malformed, expired or badly signed tokens
    if 400 <= response.status_code < 500:
        raise AuthProviderError("Token could not be verified")
    if response.status_code != 200:
        logger.error("Google tokeninfo returned %s", response.status_code)
        raise AuthProviderError("Identity provider error", error="Authentication failed", status_code=500)

    try:
        payload = response.json()
    except ValueError:
        logger.exception("Google tokeninfo returned a non-JSON body")
        raise AuthProviderError("Identity provider error", error="Authentication failed", status_code=500)

    if payload.get("aud") != settings.GOOGLE_CLIENT_ID:
        raise AuthProviderError("Token audience mismatch")

    sub = payload.get("sub")
    email = payload.get("email")
    if not sub or not email:
        raise AuthProviderError("Token is missing subject or email", error="Invalid token payload")

    return GoogleIdentity(
        sub=sub,
        email=email,
        name=payload.get("name") or email,
        picture=payload.get("picture"),
    )
