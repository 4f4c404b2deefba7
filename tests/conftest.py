"""Test-wide environment: settings are read at import time, so set them before any app import."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-key-with-at-least-32-characters")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LLM_BASE_URL", "http://llm.test")
os.environ.setdefault("LLM_API_KEY", "test-llm-key")
