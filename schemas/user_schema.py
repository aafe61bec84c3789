from pydantic import BaseModel


class UserPublic(BaseModel):
    id: int
    email: str
    name: str
    picture: str | None = None

    model_config = {
        "from_attributes": True,
    }
