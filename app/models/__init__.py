"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.cv import CV
from app.models.template import CVTemplate, TemplateEngine
from app.models.user import User

__all__ = ["Base", "CV", "CVTemplate", "TemplateEngine", "User"]
