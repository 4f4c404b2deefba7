"""CV endpoints. Every route is scoped to the caller's own CVs."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.core.errors import NotFoundError
from app.repositories.cvs import CVRepository
from app.schemas.auth import CurrentUser
from app.schemas.cv import CVCreate, CVResponse, CVUpdate
from app.services.normalize import normalize_cv_create, normalize_cv_update
from app.services.updates import UpdateBuilder

logger = logging.getLogger(__name__)

router = APIRouter()

CV_NOT_FOUND = "CV not found."

_SCALAR_FIELDS = (
    "first_name",
    "last_name",
    "city",
    "country",
    "postcode",
    "phone",
    "email",
    "photo",
    "job_title",
    "summary",
)
_LIST_FIELDS = ("skills", "work_experiences", "educations", "links")


def _as_documents(items: list | None) -> list | None:
    if items is None:
        return None
    return [item.model_dump(mode="json") if isinstance(item, BaseModel) else item for item in items]


def _schedule_cv_update(body: CVUpdate, builder: UpdateBuilder) -> UpdateBuilder:
    for field in _SCALAR_FIELDS:
        builder.set_if_present(getattr(body, field), field)
    for field in _LIST_FIELDS:
        builder.replace_list_if_present(_as_documents(getattr(body, field)), field)
    return builder


@router.post("", response_model=CVResponse, status_code=status.HTTP_201_CREATED)
def create_cv(
    body: CVCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CVResponse:
    """Create a CV owned by the caller."""
    cv = CVRepository(db).create(current_user.id, normalize_cv_create(body))
    logger.info("CV created: id=%s owner=%s", cv.id, current_user.id)
    return CVResponse.model_validate(cv)


@router.get("", response_model=list[CVResponse])
def list_cvs(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[CVResponse]:
    """The caller's CVs, most recently updated first."""
    cvs = CVRepository(db).list_for_owner(current_user.id)
    return [CVResponse.model_validate(cv) for cv in cvs]


@router.get("/{cv_id}", response_model=CVResponse)
def get_cv(
    cv_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CVResponse:
    cv = CVRepository(db).get_for_owner(cv_id, current_user.id)
    if cv is None:
        logger.warning("CV not found: id=%s owner=%s", cv_id, current_user.id)
        raise NotFoundError(CV_NOT_FOUND)
    return CVResponse.model_validate(cv)


@router.put("/{cv_id}", response_model=CVResponse)
def update_cv(
    cv_id: int,
    body: CVUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CVResponse:
    """
    Partial update. Omitted fields are untouched; a provided list replaces the
    stored one. The update is predicated on (id, owner) in one statement, so a
    CV owned by someone else is indistinguishable from a missing one.
    """
    repo = CVRepository(db)
    builder = _schedule_cv_update(normalize_cv_update(body), repo.new_builder())
    updated = repo.update_for_owner(cv_id, current_user.id, builder)
    if updated is None:
        logger.warning("CV not found on update: id=%s owner=%s", cv_id, current_user.id)
        raise NotFoundError(CV_NOT_FOUND)
    logger.info("CV updated: id=%s owner=%s fields=%s", cv_id, current_user.id, len(builder))
    return CVResponse.model_validate(updated)


@router.delete("/{cv_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cv(
    cv_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Response:
    deleted = CVRepository(db).delete_for_owner(cv_id, current_user.id)
    if deleted == 0:
        logger.warning("CV not found on delete: id=%s owner=%s", cv_id, current_user.id)
        raise NotFoundError(CV_NOT_FOUND)
    logger.info("CV deleted: id=%s owner=%s", cv_id, current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
