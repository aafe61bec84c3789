from typing import Any

from fastapi import APIRouter, Body, Depends, Response
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from core.database import database_errors, get_db
from core.errors import NotFound, ValidationError, validation_error_from
from crud.dustbin_crud import create_dustbin, delete_dustbin, get_dustbin, list_dustbins, update_dustbin
from models.dustbin import DustbinStatus
from schemas.dustbin_schema import (
    VALID_STATUSES,
    DustbinCreate,
    DustbinListResponse,
    DustbinResponse,
    DustbinUpdate,
)

router = APIRouter(prefix="/api/dustbins", tags=["Dustbins"])


def _not_found(dustbin_id: int) -> NotFound:
    return NotFound(error="Dustbin not found", extra={"id": dustbin_id})


@router.get("", response_model=DustbinListResponse)
def list_all(status: str | None = None, db: Session = Depends(get_db)):
    if status and status not in VALID_STATUSES:
        # exact match against the enum; an unknown value matches no row
        return DustbinListResponse(count=0, dustbins=[])
    with database_errors("Failed to fetch dustbins"):
        rows = list_dustbins(db, status=DustbinStatus(status) if status else None)
        return DustbinListResponse(
            count=len(rows),
            dustbins=[DustbinResponse.model_validate(row) for row in rows],
        )


@router.get("/{dustbin_id}", response_model=DustbinResponse)
def read_one(dustbin_id: int, db: Session = Depends(get_db)):
    with database_errors("Failed to fetch dustbin"):
        dustbin = get_dustbin(db, dustbin_id)
    if not dustbin:
        raise _not_found(dustbin_id)
    return dustbin


@router.post("", response_model=DustbinResponse, status_code=201)
def create(payload: DustbinCreate, db: Session = Depends(get_db)):
    with database_errors("Failed to create dustbin"):
        return create_dustbin(db, payload)


@router.put("/{dustbin_id}", response_model=DustbinResponse)
def update(dustbin_id: int, body: dict[str, Any] | None = Body(None), db: Session = Depends(get_db)):
    # a missing row is reported before any problem with the body
    with database_errors("Failed to update dustbin"):
        if not get_dustbin(db, dustbin_id):
            raise _not_found(dustbin_id)
        try:
            payload = DustbinUpdate.model_validate(body or {})
        except PydanticValidationError as exc:
            raise validation_error_from(exc)
        if not payload.model_fields_set:
            raise ValidationError("Provide at least one field to update", error="No fields to update")
        return update_dustbin(db, dustbin_id, payload)


@router.delete("/{dustbin_id}", status_code=204)
def delete(dustbin_id: int, db: Session = Depends(get_db)):
    with database_errors("Failed to delete dustbin"):
        ok = delete_dustbin(db, dustbin_id)
    if not ok:
        raise _not_found(dustbin_id)
    return Response(status_code=204)
