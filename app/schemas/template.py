"""Request/response schemas for CV template endpoints."""

from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.template import TemplateEngine
from app.schemas.common import strip_text


class MarkupBody(BaseModel):
    """Engine payload of a Markup template: HTML with {{placeholders}} plus optional CSS."""

    engine: Literal["Markup"] = "Markup"
    markup: str = Field(..., min_length=1)
    css: str | None = None


class ReactSchemaBody(BaseModel):
    """Engine payload of a ReactSchema template: layout DSL plus optional style tokens."""

    engine: Literal["ReactSchema"] = "ReactSchema"
    layout: list[Any]
    tokens: dict[str, Any] | None = None


# Exactly one field group exists per template; the engine tag selects it.
TemplateBody = Annotated[MarkupBody | ReactSchemaBody, Field(discriminator="engine")]


class CVTemplateCreate(BaseModel):
    """
    Payload for POST /cv-templates.

    Markup requires markup (css optional); ReactSchema requires layout
    (tokens optional). Fields of the other engine are ignored.
    """

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., max_length=2000)
    engine: TemplateEngine
    markup: str | None = None
    css: str | None = None
    tokens: dict[str, Any] | None = None
    layout: list[Any] | None = None
    version: str = Field(default="1.0.0", max_length=64)
    variables: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    preview_image_url: str | None = Field(default=None, max_length=2048)
    is_active: bool = True

    @field_validator("name", "description", mode="before")
    @classmethod
    def strip_names(cls, v: str) -> str:
        return strip_text(v)


class CVTemplateUpdate(BaseModel):
    """
    Partial payload for PUT /cv-templates/{id}; only provided fields are applied.

    When engine is provided, the target engine's required field must be
    provided too, and the other engine's fields are cleared.
    """

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=2000)
    engine: TemplateEngine | None = None
    markup: str | None = None
    css: str | None = None
    tokens: dict[str, Any] | None = None
    layout: list[Any] | None = None
    version: str | None = Field(default=None, max_length=64)
    variables: list[str] | None = None
    tags: list[str] | None = None
    preview_image_url: str | None = Field(default=None, max_length=2048)
    is_active: bool | None = None

    @field_validator("name", "description", mode="before")
    @classmethod
    def strip_names(cls, v: str | None) -> str | None:
        return strip_text(v)


class CVTemplateListItem(BaseModel):
    """Lightweight shape for template galleries (no engine payload)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    engine: TemplateEngine
    version: str
    tags: list[str]
    preview_image_url: str | None = None
    is_active: bool


class CVTemplateDetail(CVTemplateListItem):
    """Full definition, including the engine-specific fields."""

    markup: str | None = None
    css: str | None = None
    tokens: dict[str, Any] | None = None
    layout: list[Any] | None = None
    variables: list[str]
    created_at: datetime
    updated_at: datetime
