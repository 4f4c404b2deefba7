"""CV template persistence with filtered listing."""

from typing import Any

from sqlalchemy import or_, type_coerce
from sqlalchemy.dialects.postgresql import JSONB

from app.models.template import CVTemplate, TemplateEngine
from app.repositories.base import Repository
from app.services.updates import UpdateBuilder


def _like_pattern(term: str) -> str:
    """Substring pattern with LIKE wildcards in term escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class TemplateRepository(Repository[CVTemplate]):
    model = CVTemplate

    def _is_postgres(self) -> bool:
        return self.db.get_bind().dialect.name == "postgresql"

    def list_filtered(
        self,
        engine: TemplateEngine | None = None,
        active_only: bool | None = None,
        search: str | None = None,
        tags: list[str] | None = None,
    ) -> list[CVTemplate]:
        """
        Templates ordered by name.

        search: case-insensitive substring of name or description.
        tags: a template must carry every one of them.
        """
        query = self.db.query(CVTemplate)
        if engine is not None:
            query = query.filter(CVTemplate.engine == engine)
        if active_only:
            query = query.filter(CVTemplate.is_active.is_(True))
        if search and search.strip():
            pattern = _like_pattern(search.strip())
            query = query.filter(
                or_(
                    CVTemplate.name.ilike(pattern, escape="\\"),
                    CVTemplate.description.ilike(pattern, escape="\\"),
                )
            )
        wanted = [t for t in (tags or []) if t]
        if wanted and self._is_postgres():
            # JSONB containment, served by the GIN index on tags.
            query = query.filter(type_coerce(CVTemplate.tags, JSONB).contains(wanted))
        templates = query.order_by(CVTemplate.name, CVTemplate.id).all()
        if wanted and not self._is_postgres():
            templates = [t for t in templates if set(wanted).issubset(t.tags or [])]
        return templates

    def create(self, **fields: Any) -> CVTemplate:
        return self.insert(CVTemplate(**fields))

    def update(
        self,
        template_id: int,
        builder: UpdateBuilder,
        expected_engine: TemplateEngine | None = None,
    ) -> CVTemplate | None:
        """
        Apply builder atomically. With expected_engine, the row must also use
        that engine, so engine-specific fields never land on the wrong group.
        """
        criteria = [CVTemplate.id == template_id]
        if expected_engine is not None:
            criteria.append(CVTemplate.engine == expected_engine)
        return self.commit_builder(criteria, builder)

    def delete(self, template_id: int) -> int:
        return self.delete_where([CVTemplate.id == template_id])
