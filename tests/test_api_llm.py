"""HTTP tests for the text-generation proxy routes with a mocked provider."""

import httpx

from app.api.v1.llm import get_llm_client
from app.core.config import get_settings
from app.main import app
from app.services.llm import LlmClient
from helpers import ApiTestCase


class TestLlmRoutes(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        _, token = self.sign_up("alice")
        self.headers = self.bearer(token)

    def use_provider(self, handler) -> None:
        client = LlmClient(get_settings(), transport=httpx.MockTransport(handler))
        app.dependency_overrides[get_llm_client] = lambda: client

    def test_extract_keywords(self) -> None:
        self.use_provider(lambda request: httpx.Response(200, json={"skills": ["Go"], "keywords": ["api"]}))
        response = self.client.post(
            self.url("/llmconnection/extract-keywords"),
            json={"job_description": "Go API developer"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["skills"], ["Go"])

    def test_summary(self) -> None:
        self.use_provider(lambda request: httpx.Response(200, json={"summary": "Engineer."}))
        response = self.client.post(
            self.url("/llmconnection/summary"),
            json={"profile": {"name": "Alice", "skills": ["Go"]}, "job_description": "Go role"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"summary": "Engineer."})

    def test_provider_failure_is_502(self) -> None:
        self.use_provider(lambda request: httpx.Response(500, text="boom"))
        response = self.client.post(
            self.url("/llmconnection/cover-letter"),
            json={"profile": {"name": "Alice"}, "job_description": "Go role"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 502)
        self.assertIn("LLM error 500", response.json()["detail"])

    def test_unreachable_provider_is_503(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        self.use_provider(handler)
        response = self.client.post(
            self.url("/llmconnection/extract-keywords"),
            json={"job_description": "x"},
            headers=self.headers,
        )
        self.assertEqual(response.status_code, 503)

    def test_requires_token(self) -> None:
        response = self.client.post(self.url("/llmconnection/extract-keywords"), json={"job_description": "x"})
        self.assertEqual(response.status_code, 401)
