"""CV template endpoints: authenticated browsing, Admin-only writes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_admin
from app.core.database import get_db
from app.core.errors import InputValidationError, NotFoundError
from app.models.template import TemplateEngine
from app.repositories.templates import TemplateRepository
from app.schemas.auth import CurrentUser
from app.schemas.template import (
    CVTemplateCreate,
    CVTemplateDetail,
    CVTemplateListItem,
    CVTemplateUpdate,
)
from app.services.templates import new_template_fields, plan_template_update

logger = logging.getLogger(__name__)

router = APIRouter()

TEMPLATE_NOT_FOUND = "Template not found."


@router.get("", response_model=list[CVTemplateListItem])
def list_templates(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    engine: TemplateEngine | None = None,
    active_only: bool | None = None,
    search: str | None = Query(default=None, max_length=200),
    tags: list[str] | None = Query(default=None),
) -> list[CVTemplateListItem]:
    """
    List templates, optionally filtered by engine, active flag, a
    case-insensitive search over name/description, and tags (all must match).
    """
    templates = TemplateRepository(db).list_filtered(
        engine=engine,
        active_only=active_only,
        search=search,
        tags=tags,
    )
    return [CVTemplateListItem.model_validate(t) for t in templates]


@router.get("/{template_id}", response_model=CVTemplateDetail)
def get_template(
    template_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CVTemplateDetail:
    template = TemplateRepository(db).get(template_id)
    if template is None:
        raise NotFoundError(TEMPLATE_NOT_FOUND)
    return CVTemplateDetail.model_validate(template)


@router.post("", response_model=CVTemplateDetail, status_code=status.HTTP_201_CREATED)
def create_template(
    body: CVTemplateCreate,
    db: Annotated[Session, Depends(get_db)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> CVTemplateDetail:
    template = TemplateRepository(db).create(**new_template_fields(body))
    logger.info(
        "Template created: id=%s engine=%s by admin %s",
        template.id,
        template.engine.value,
        admin.id,
    )
    return CVTemplateDetail.model_validate(template)


@router.put("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_template(
    template_id: int,
    body: CVTemplateUpdate,
    db: Annotated[Session, Depends(get_db)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    """
    Partial update. Engine-specific fields only apply to a template of that
    engine; switching engine requires the new engine's required field and
    clears the old engine's fields.
    """
    repo = TemplateRepository(db)
    builder = repo.new_builder()
    expected_engine = plan_template_update(body, builder)
    updated = repo.update(template_id, builder, expected_engine=expected_engine)
    if updated is None:
        if expected_engine is not None and repo.get(template_id) is not None:
            raise InputValidationError(
                f"Fields do not apply to this template's engine (expected {expected_engine.value})."
            )
        raise NotFoundError(TEMPLATE_NOT_FOUND)
    logger.info("Template updated: id=%s by admin %s", template_id, admin.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(
    template_id: int,
    db: Annotated[Session, Depends(get_db)],
    admin: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    if TemplateRepository(db).delete(template_id) == 0:
        raise NotFoundError(TEMPLATE_NOT_FOUND)
    logger.info("Template deleted: id=%s by admin %s", template_id, admin.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
