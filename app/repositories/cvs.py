"""CV persistence. Every read and write is scoped by (id, owner_id)."""

from app.models.cv import CV
from app.repositories.base import Repository
from app.schemas.cv import CVCreate
from app.services.updates import UpdateBuilder


def _owned(cv_id: int, owner_id: int) -> list:
    return [CV.id == cv_id, CV.owner_id == owner_id]


class CVRepository(Repository[CV]):
    model = CV

    def get_for_owner(self, cv_id: int, owner_id: int) -> CV | None:
        """The id alone never satisfies this lookup; the owner must match too."""
        return self._first(*_owned(cv_id, owner_id))

    def list_for_owner(self, owner_id: int) -> list[CV]:
        return (
            self.db.query(CV)
            .filter(CV.owner_id == owner_id)
            .order_by(CV.updated_at.desc(), CV.id.desc())
            .all()
        )

    def create(self, owner_id: int, payload: CVCreate) -> CV:
        data = payload.model_dump(mode="json")
        return self.insert(CV(owner_id=owner_id, **data))

    def update_for_owner(self, cv_id: int, owner_id: int, builder: UpdateBuilder) -> CV | None:
        return self.commit_builder(_owned(cv_id, owner_id), builder)

    def delete_for_owner(self, cv_id: int, owner_id: int) -> int:
        return self.delete_where(_owned(cv_id, owner_id))
