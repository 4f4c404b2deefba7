"""ORM model for CV rendering templates."""

import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Index, Integer, String, Text

from app.models.base import Base, JSONDocument


class TemplateEngine(str, enum.Enum):
    """Rendering engine; decides which field group of a template is populated."""

    REACT_SCHEMA = "ReactSchema"
    MARKUP = "Markup"


class CVTemplate(Base):
    """
    Rendering definition, not owned by any user.

    Markup templates populate markup (+ optional css); ReactSchema templates
    populate layout (+ optional tokens). The other group is always NULL.
    """

    __tablename__ = "cv_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    engine = Column(
        Enum(
            TemplateEngine,
            name="template_engine",
            values_callable=lambda e: [m.value for m in e],
            validate_strings=True,
        ),
        nullable=False,
    )

    # Markup engine
    markup = Column(Text, nullable=True)
    css = Column(Text, nullable=True)

    # ReactSchema engine
    tokens = Column(JSONDocument, nullable=True)
    layout = Column(JSONDocument, nullable=True)

    version = Column(String(64), nullable=False, default="1.0.0")
    variables = Column(JSONDocument, nullable=False, default=list)
    tags = Column(JSONDocument, nullable=False, default=list)
    preview_image_url = Column(String(2048), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_cv_templates_name", "name"),
        Index("ix_cv_templates_engine", "engine"),
        Index("ix_cv_templates_tags", "tags", postgresql_using="gin"),
    )
