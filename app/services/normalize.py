"""Normalize free-text fields of inbound payloads before they reach persistence.

Every function here is pure and idempotent: normalizing an already
normalized value returns it unchanged.
"""

import re
from collections.abc import Iterable

from app.schemas.common import Link
from app.schemas.cv import CVCreate, CVUpdate, Education, WorkExperience
from app.schemas.user import UpdateUserRequest

# Two or more consecutive whitespace characters (spaces, tabs, newlines).
_MULTI_SPACE = re.compile(r"\s{2,}")


def normalize_text(value: str | None) -> str:
    """Trim and collapse internal whitespace runs to a single space. None becomes ""."""
    return _MULTI_SPACE.sub(" ", (value or "").strip())


def normalize_optional(value: str | None) -> str | None:
    """Like normalize_text, but an empty result is absent (None), never ""."""
    if value is None:
        return None
    normalized = normalize_text(value)
    return normalized or None


def normalize_skills(skills: Iterable[str]) -> list[str]:
    """
    Normalize each skill, drop empties and de-duplicate case-insensitively.

    The first occurrence's casing and the original relative order win:
    ["Go", " go ", "GO", "Rust"] -> ["Go", "Rust"].
    """
    seen: set[str] = set()
    result: list[str] = []
    for raw in skills:
        skill = normalize_text(raw)
        if not skill:
            continue
        key = skill.casefold()
        if key in seen:
            continue
        seen.add(key)
        result.append(skill)
    return result


def _normalize_experience(item: WorkExperience) -> WorkExperience:
    return item.model_copy(
        update={
            "position": normalize_text(item.position),
            "company": normalize_text(item.company),
            "description": normalize_text(item.description),
        }
    )


def _normalize_education(item: Education) -> Education:
    return item.model_copy(
        update={
            "degree": normalize_text(item.degree),
            "school": normalize_text(item.school),
        }
    )


def _normalize_link(item: Link) -> Link:
    return item.model_copy(
        update={"type": normalize_text(item.type), "url": normalize_text(item.url)}
    )


def normalize_links(links: Iterable[Link]) -> list[Link]:
    return [_normalize_link(link) for link in links]


def normalize_cv_create(payload: CVCreate) -> CVCreate:
    """Normalize every free-text field of a full CV payload."""
    return payload.model_copy(
        update={
            "first_name": normalize_text(payload.first_name),
            "last_name": normalize_text(payload.last_name),
            "city": normalize_text(payload.city),
            "country": normalize_text(payload.country),
            "postcode": normalize_text(payload.postcode),
            "phone": normalize_text(payload.phone),
            "email": normalize_text(payload.email),
            "photo": normalize_optional(payload.photo),
            "job_title": normalize_text(payload.job_title),
            "summary": normalize_text(payload.summary),
            "skills": normalize_skills(payload.skills),
            "work_experiences": [_normalize_experience(w) for w in payload.work_experiences],
            "educations": [_normalize_education(e) for e in payload.educations],
            "links": normalize_links(payload.links),
        }
    )


def normalize_cv_update(payload: CVUpdate) -> CVUpdate:
    """
    Normalize only the fields present in a partial CV payload.

    Scalar fields that are blank after trimming become absent, so they leave
    the stored value untouched. Lists that are absent stay absent; a present
    list (even an empty one) is normalized and stays present.
    """
    update: dict[str, object] = {
        "first_name": normalize_optional(payload.first_name),
        "last_name": normalize_optional(payload.last_name),
        "city": normalize_optional(payload.city),
        "country": normalize_optional(payload.country),
        "postcode": normalize_optional(payload.postcode),
        "phone": normalize_optional(payload.phone),
        "email": normalize_optional(payload.email),
        "photo": normalize_optional(payload.photo),
        "job_title": normalize_optional(payload.job_title),
        "summary": normalize_optional(payload.summary),
    }
    if payload.skills is not None:
        update["skills"] = normalize_skills(payload.skills)
    if payload.work_experiences is not None:
        update["work_experiences"] = [_normalize_experience(w) for w in payload.work_experiences]
    if payload.educations is not None:
        update["educations"] = [_normalize_education(e) for e in payload.educations]
    if payload.links is not None:
        update["links"] = normalize_links(payload.links)
    return payload.model_copy(update=update)


def normalize_profile_update(payload: UpdateUserRequest) -> UpdateUserRequest:
    """Normalize the free-text profile fields of a user update; credentials are left as sent."""
    update: dict[str, object] = {
        "first_name": normalize_optional(payload.first_name),
        "last_name": normalize_optional(payload.last_name),
        "headline": normalize_optional(payload.headline),
        "phone": normalize_optional(payload.phone),
        "location": normalize_optional(payload.location),
        "avatar_url": normalize_optional(payload.avatar_url),
    }
    if payload.links is not None:
        update["links"] = normalize_links(payload.links)
    return payload.model_copy(update=update)
