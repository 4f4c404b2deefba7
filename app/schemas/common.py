"""Small value objects and validators shared by the request schemas."""

from typing import Any

from pydantic import BaseModel, Field


def strip_text(value: Any) -> Any:
    """Trim surrounding whitespace before length constraints are checked."""
    if isinstance(value, str):
        return value.strip()
    return value


class Link(BaseModel):
    """Typed external link, e.g. {"type": "github", "url": "https://github.com/x"}."""

    type: str = Field(..., max_length=64, description="Link label (website, github, linkedin, ...)")
    url: str = Field(..., max_length=2048, description="Absolute URL")
