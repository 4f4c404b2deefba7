"""ORM model for CV documents owned by a single user."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String, Text

from app.models.base import Base, JSONDocument


class CV(Base):
    """
    One CV per row; owner_id is set on creation and never reassigned.

    skills: list of strings (normalized, de-duplicated case-insensitively).
    work_experiences: list of {position, company, start_date, end_date, description}.
    educations: list of {degree, school, start_date, end_date}.
    links: list of {type, url}.
    """

    __tablename__ = "cvs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    city = Column(String(255), nullable=False)
    country = Column(String(255), nullable=False)
    postcode = Column(String(32), nullable=False)
    phone = Column(String(64), nullable=False)
    email = Column(String(320), nullable=False)
    photo = Column(String(2048), nullable=True)
    job_title = Column(String(255), nullable=False)
    summary = Column(Text, nullable=False)

    skills = Column(JSONDocument, nullable=False, default=list)
    work_experiences = Column(JSONDocument, nullable=False, default=list)
    educations = Column(JSONDocument, nullable=False, default=list)
    links = Column(JSONDocument, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_cvs_owner_id", "owner_id"),
        Index("ix_cvs_owner_id_id", "owner_id", "id"),
    )
