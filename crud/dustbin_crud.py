from sqlalchemy import desc
from sqlalchemy.orm import Session

from models.base import utcnow
from models.dustbin import Dustbin, DustbinStatus
from schemas.dustbin_schema import DustbinCreate, DustbinUpdate


def get_dustbin(db: Session, dustbin_id: int):
    return db.query(Dustbin).filter(Dustbin.id == dustbin_id).first()


def list_dustbins(db: Session, status: DustbinStatus | None = None):
    q = db.query(Dustbin)
    if status:
        q = q.filter(Dustbin.status == status)
    return q.order_by(desc(Dustbin.created_at), desc(Dustbin.id)).all()


def create_dustbin(db: Session, payload: DustbinCreate):
    now = utcnow()
    dustbin = Dustbin(
        latitude=payload.latitude,
        longitude=payload.longitude,
        address=payload.address or None,
        description=payload.description or None,
        reported_by=payload.reported_by or None,
        status=DustbinStatus.ACTIVE,
        created_at=now,
        updated_at=now,
    )
    db.add(dustbin)
    db.commit()
    db.refresh(dustbin)
    return dustbin


def update_dustbin(db: Session, dustbin_id: int, payload: DustbinUpdate):
    dustbin = get_dustbin(db, dustbin_id)
    if not dustbin:
        return None
    for k, v in payload.changes().items():
        setattr(dustbin, k, v)
    dustbin.updated_at = utcnow()
    db.commit()
    db.refresh(dustbin)
    return dustbin


def delete_dustbin(db: Session, dustbin_id: int) -> bool:
    dustbin = get_dustbin(db, dustbin_id)
    if not dustbin:
        return False
    db.delete(dustbin)
    db.commit()
    return True
