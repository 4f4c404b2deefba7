"""Schemas for the text-generation proxy (provider wire format is snake_case)."""

from pydantic import BaseModel, Field


class ExperienceItem(BaseModel):
    company: str
    role: str
    start: str | None = None
    end: str | None = None
    bullets: list[str] = Field(default_factory=list)


class EducationItem(BaseModel):
    school: str
    degree: str | None = None
    year: str | None = None


class CanonicalProfile(BaseModel):
    """Candidate profile in the shape the provider expects."""

    name: str | None = None
    title: str | None = None
    summary: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience: list[ExperienceItem] = Field(default_factory=list)
    education: list[EducationItem] = Field(default_factory=list)


class JobDescriptionRequest(BaseModel):
    job_description: str = Field(..., min_length=1, max_length=50_000)


class KeywordsResponse(BaseModel):
    skills: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    seniority: str | None = None
    nice_to_have: list[str] = Field(default_factory=list)


class SummaryRequest(BaseModel):
    profile: CanonicalProfile
    job_description: str | None = Field(default=None, max_length=50_000)


class SummaryResponse(BaseModel):
    summary: str


class CoverLetterRequest(BaseModel):
    profile: CanonicalProfile
    job_description: str = Field(..., min_length=1, max_length=50_000)
    company: str | None = None
    role: str | None = None


class CoverLetterResponse(BaseModel):
    cover_letter: str
