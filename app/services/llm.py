"""Thin proxy to the external text-generation service (keywords, summary, cover letter)."""

import logging
import time
from typing import TYPE_CHECKING, Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from app.core.errors import InfrastructureError
from app.schemas.llm import (
    CoverLetterRequest,
    CoverLetterResponse,
    JobDescriptionRequest,
    KeywordsResponse,
    SummaryRequest,
    SummaryResponse,
)

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

KEYWORDS_PATH = "/resume/keywords"
SUMMARY_PATH = "/resume/summary"
COVER_LETTER_PATH = "/resume/cover-letter"

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class LlmServiceError(InfrastructureError):
    """Raised when the provider is unreachable, times out, or answers with an error."""

    def __init__(
        self,
        message: str,
        status_code: int = 502,
        provider_status: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.provider_status = provider_status
        self.cause = cause
        super().__init__(message, status_code=status_code)


class LlmClient:
    """
    Posts JSON to LLM_BASE_URL with the API key header and parses the reply.

    transport is for tests (httpx.MockTransport); production uses the default.
    """

    def __init__(
        self,
        settings: "Settings",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        key = self.settings.LLM_API_KEY
        if key is None or not key.get_secret_value().strip():
            raise LlmServiceError(
                "Text-generation service is not configured (LLM_API_KEY missing).",
                status_code=503,
            )
        return {self.settings.LLM_API_KEY_HEADER: key.get_secret_value()}

    async def post(self, path: str, body: BaseModel, response_model: type[ResponseT]) -> ResponseT:
        url = f"{self.settings.LLM_BASE_URL}{path}"
        headers = self._headers()
        payload: dict[str, Any] = body.model_dump(mode="json")
        timeout = httpx.Timeout(self.settings.LLM_REQUEST_TIMEOUT_SEC)
        start = time.perf_counter()

        try:
            async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
                response = await client.post(url, json=payload, headers=headers)
        except httpx.ConnectError as e:
            logger.warning(
                "LLM request failed: unreachable",
                extra={"llm_path": path, "llm_latency_seconds": time.perf_counter() - start},
            )
            raise LlmServiceError(
                "Text-generation service is unreachable.", status_code=503, cause=e
            ) from e
        except httpx.TimeoutException as e:
            logger.warning(
                "LLM request failed: timeout",
                extra={"llm_path": path, "llm_latency_seconds": time.perf_counter() - start},
            )
            raise LlmServiceError(
                "Text-generation service timed out.", status_code=503, cause=e
            ) from e
        except httpx.HTTPError as e:
            raise LlmServiceError(f"Text-generation request failed: {e}", cause=e) from e

        elapsed = time.perf_counter() - start
        if response.status_code >= 400:
            logger.warning(
                "LLM call failed: %s",
                response.status_code,
                extra={"llm_path": path, "llm_latency_seconds": elapsed},
            )
            raise LlmServiceError(
                f"LLM error {response.status_code}: {response.text[:500]}",
                status_code=502,
                provider_status=response.status_code,
            )

        try:
            result = response_model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise LlmServiceError(
                "Text-generation service returned an unexpected response.", cause=e
            ) from e
        logger.info(
            "LLM call succeeded",
            extra={"llm_path": path, "llm_latency_seconds": elapsed},
        )
        return result

    async def extract_keywords(self, req: JobDescriptionRequest) -> KeywordsResponse:
        return await self.post(KEYWORDS_PATH, req, KeywordsResponse)

    async def summary(self, req: SummaryRequest) -> SummaryResponse:
        return await self.post(SUMMARY_PATH, req, SummaryResponse)

    async def cover_letter(self, req: CoverLetterRequest) -> CoverLetterResponse:
        return await self.post(COVER_LETTER_PATH, req, CoverLetterResponse)
