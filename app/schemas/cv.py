"""Request/response schemas for CV endpoints."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.schemas.common import Link


class WorkExperience(BaseModel):
    position: str = Field(..., max_length=255)
    company: str = Field(..., max_length=255)
    start_date: date
    end_date: date | None = None
    description: str = Field(default="", max_length=10_000)


class Education(BaseModel):
    degree: str = Field(..., max_length=255)
    school: str = Field(..., max_length=255)
    start_date: date
    end_date: date | None = None


class CVCreate(BaseModel):
    """Full CV payload for POST /cvs."""

    first_name: str = Field(..., max_length=255)
    last_name: str = Field(..., max_length=255)
    city: str = Field(..., max_length=255)
    country: str = Field(..., max_length=255)
    postcode: str = Field(..., max_length=32)
    phone: str = Field(..., max_length=64)
    email: EmailStr
    photo: str | None = Field(default=None, max_length=2048)
    job_title: str = Field(..., max_length=255)
    summary: str = Field(..., max_length=10_000)
    skills: list[str] = Field(default_factory=list, max_length=200)
    work_experiences: list[WorkExperience] = Field(default_factory=list, max_length=100)
    educations: list[Education] = Field(default_factory=list, max_length=100)
    links: list[Link] = Field(default_factory=list, max_length=50)


class CVUpdate(BaseModel):
    """
    Partial CV payload for PUT /cvs/{id}.

    Omitted (or null) fields are left untouched. A list that is present
    replaces the stored list entirely; an empty list clears it.
    """

    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)
    city: str | None = Field(default=None, max_length=255)
    country: str | None = Field(default=None, max_length=255)
    postcode: str | None = Field(default=None, max_length=32)
    phone: str | None = Field(default=None, max_length=64)
    email: EmailStr | None = None
    photo: str | None = Field(default=None, max_length=2048)
    job_title: str | None = Field(default=None, max_length=255)
    summary: str | None = Field(default=None, max_length=10_000)
    skills: list[str] | None = Field(default=None, max_length=200)
    work_experiences: list[WorkExperience] | None = Field(default=None, max_length=100)
    educations: list[Education] | None = Field(default=None, max_length=100)
    links: list[Link] | None = Field(default=None, max_length=50)


class CVResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    first_name: str
    last_name: str
    city: str
    country: str
    postcode: str
    phone: str
    email: str
    photo: str | None = None
    job_title: str
    summary: str
    skills: list[str]
    work_experiences: list[WorkExperience]
    educations: list[Education]
    links: list[Link]
    created_at: datetime
    updated_at: datetime
