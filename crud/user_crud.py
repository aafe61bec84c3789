from sqlalchemy.orm import Session

from models.base import utcnow
from models.user import User
from schemas.auth_schema import GoogleIdentity


def get_user(db: Session, user_id: int):
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_google_id(db: Session, google_id: str):
    return db.query(User).filter(User.google_id == google_id).first()


def upsert_google_user(db: Session, identity: GoogleIdentity):
    # Lookup and write are separate statements; concurrent first sign-ins can race
    user = get_user_by_google_id(db, identity.sub)
    if not user:
        user = User(
            google_id=identity.sub,
            email=identity.email,
            name=identity.name,
            picture=identity.picture,
        )
        db.add(user)
    else:
        user.name = identity.name
        user.picture = identity.picture
        user.updated_at = utcnow()
    db.commit()
    db.refresh(user)
    return user
