from fastapi import APIRouter

from caseprobe.api.routes_auth import router as auth_router
from caseprobe.api.routes_cases import router as cases_router
from caseprobe.api.routes_users import router as users_router
from caseprobe.models.common_schemas import MessageResponse

HEALTH_MESSAGE = "CaseProbe HTTP test case service using FastAPI, SQLAlchemy and httpx"

# 统一入口：所有 API 都从 /api 开始
router = APIRouter(prefix="/api")


@router.get("/healthchecker", response_model=MessageResponse, tags=["health"])
def health_checker():
    """存活探针"""
    return MessageResponse(message=HEALTH_MESSAGE)


router.include_router(auth_router)
router.include_router(users_router)
router.include_router(cases_router)
