"""Proxy endpoints to the external text-generation service."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.auth import get_current_user
from app.core.config import get_settings
from app.schemas.auth import CurrentUser
from app.schemas.llm import (
    CoverLetterRequest,
    CoverLetterResponse,
    JobDescriptionRequest,
    KeywordsResponse,
    SummaryRequest,
    SummaryResponse,
)
from app.services.llm import LlmClient

router = APIRouter()


def get_llm_client() -> LlmClient:
    return LlmClient(get_settings())


@router.post("/extract-keywords", response_model=KeywordsResponse)
async def extract_keywords(
    body: JobDescriptionRequest,
    client: Annotated[LlmClient, Depends(get_llm_client)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> KeywordsResponse:
    """Keywords extracted from a job description."""
    return await client.extract_keywords(body)


@router.post("/summary", response_model=SummaryResponse)
async def generate_summary(
    body: SummaryRequest,
    client: Annotated[LlmClient, Depends(get_llm_client)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> SummaryResponse:
    """Professional summary from a canonical profile and job description."""
    return await client.summary(body)


@router.post("/cover-letter", response_model=CoverLetterResponse)
async def generate_cover_letter(
    body: CoverLetterRequest,
    client: Annotated[LlmClient, Depends(get_llm_client)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CoverLetterResponse:
    return await client.cover_letter(body)
