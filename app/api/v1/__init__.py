"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import cvs, health, llm, sessions, templates, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(cvs.router, prefix="/cvs", tags=["cvs"])
router.include_router(templates.router, prefix="/cv-templates", tags=["cv-templates"])
router.include_router(llm.router, prefix="/llmconnection", tags=["llm"])
