"""Engine-specific rules for CV templates.

A template's payload is MarkupBody or ReactSchemaBody. These helpers turn
flat request payloads into that union, and translate partial updates into
builder operations that keep exactly one field group populated.
"""

from typing import Any

from pydantic import TypeAdapter, ValidationError

from app.core.errors import InputValidationError
from app.models.template import TemplateEngine
from app.schemas.template import (
    CVTemplateCreate,
    CVTemplateUpdate,
    MarkupBody,
    ReactSchemaBody,
    TemplateBody,
)
from app.services.updates import UpdateBuilder

_body_adapter: TypeAdapter[MarkupBody | ReactSchemaBody] = TypeAdapter(TemplateBody)

MARKUP_REQUIRED = "Markup templates require 'markup' HTML."
LAYOUT_REQUIRED = "React-schema templates require 'layout' JSON."
MIXED_GROUPS = "Provide either markup/css or tokens/layout, not both."


def _has_text(value: str | None) -> bool:
    return value is not None and bool(value.strip())


def body_from_create(req: CVTemplateCreate) -> MarkupBody | ReactSchemaBody:
    """Build the engine payload; fields of the other engine are dropped."""
    if req.engine == TemplateEngine.MARKUP:
        if not _has_text(req.markup):
            raise InputValidationError(MARKUP_REQUIRED)
        raw: dict[str, Any] = {"engine": req.engine.value, "markup": req.markup, "css": req.css}
    else:
        if req.layout is None:
            raise InputValidationError(LAYOUT_REQUIRED)
        raw = {"engine": req.engine.value, "layout": req.layout, "tokens": req.tokens}
    try:
        return _body_adapter.validate_python(raw)
    except ValidationError as e:
        raise InputValidationError(f"Invalid {req.engine.value} template payload.") from e


def engine_columns(body: MarkupBody | ReactSchemaBody) -> dict[str, Any]:
    """Column values for body, with the other engine's group set to NULL."""
    if isinstance(body, MarkupBody):
        return {
            "engine": TemplateEngine.MARKUP,
            "markup": body.markup,
            "css": body.css,
            "tokens": None,
            "layout": None,
        }
    return {
        "engine": TemplateEngine.REACT_SCHEMA,
        "markup": None,
        "css": None,
        "tokens": body.tokens,
        "layout": body.layout,
    }


def new_template_fields(req: CVTemplateCreate) -> dict[str, Any]:
    fields = {
        "name": req.name,
        "description": req.description,
        "version": req.version,
        "variables": list(req.variables),
        "tags": list(req.tags),
        "preview_image_url": req.preview_image_url,
        "is_active": req.is_active,
    }
    fields.update(engine_columns(body_from_create(req)))
    return fields


def plan_template_update(req: CVTemplateUpdate, builder: UpdateBuilder) -> TemplateEngine | None:
    """
    Schedule req onto builder.

    Returns the engine the stored template must already use for the update to
    apply, or None when the update is engine-agnostic (or switches engine).
    """
    markup_group = req.markup is not None or req.css is not None
    react_group = req.tokens is not None or req.layout is not None
    if markup_group and react_group:
        raise InputValidationError(MIXED_GROUPS)

    expected: TemplateEngine | None = None
    if req.engine == TemplateEngine.MARKUP:
        if not _has_text(req.markup):
            raise InputValidationError(MARKUP_REQUIRED)
        builder.set(TemplateEngine.MARKUP, "engine")
        builder.set(req.markup, "markup")
        builder.set_if_present(req.css, "css")
        builder.set(None, "tokens").set(None, "layout")
    elif req.engine == TemplateEngine.REACT_SCHEMA:
        if req.layout is None:
            raise InputValidationError(LAYOUT_REQUIRED)
        builder.set(TemplateEngine.REACT_SCHEMA, "engine")
        builder.set(req.layout, "layout")
        builder.set_if_present(req.tokens, "tokens")
        builder.set(None, "markup").set(None, "css")
    elif markup_group:
        if req.markup is not None and not _has_text(req.markup):
            raise InputValidationError(MARKUP_REQUIRED)
        builder.set_if_present(req.markup, "markup").set_if_present(req.css, "css")
        expected = TemplateEngine.MARKUP
    elif react_group:
        builder.set_if_present(req.layout, "layout").set_if_present(req.tokens, "tokens")
        expected = TemplateEngine.REACT_SCHEMA

    builder.set_if_present(req.name, "name")
    builder.set_if_present(req.description, "description")
    builder.set_if_present(req.version, "version")
    builder.replace_list_if_present(req.variables, "variables")
    builder.replace_list_if_present(req.tags, "tags")
    builder.set_if_present(req.preview_image_url, "preview_image_url")
    builder.set_if_present(req.is_active, "is_active")
    return expected
