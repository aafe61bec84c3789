from pydantic import BaseModel, Field

from schemas.user_schema import UserPublic


class GoogleSignInRequest(BaseModel):
    id_token: str | None = Field(default=None, alias="idToken")

    model_config = {"populate_by_name": True}


class GoogleIdentity(BaseModel):
    """Claims taken from a verified Google ID token."""

    sub: str
    email: str
    name: str
    picture: str | None = None


class SessionClaims(BaseModel):
    user_id: int = Field(alias="userId")
    email: str

    model_config = {"populate_by_name": True}


class SignInResponse(BaseModel):
    success: bool = True
    token: str
    user: UserPublic


class MeResponse(BaseModel):
    user: UserPublic
