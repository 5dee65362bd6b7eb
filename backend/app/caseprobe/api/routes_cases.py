"""CaseProbe - Case API Routes

HTTP 测试用例管理 API 路由

注意：列表与创建需要登录并按当前用户隔离；按 ID 的查询、更新、删除、发送
不需要登录，也不校验所属用户。
"""
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from caseprobe.api.deps.auth_deps import get_current_user
from caseprobe.core.context import AppContext, get_context
from caseprobe.database.config import get_db
from caseprobe.database.models import Case
from caseprobe.database.user_models import User
from caseprobe.models.case_schemas import (
    CaseCreate,
    CaseData,
    CaseEnvelope,
    CaseListResponse,
    CaseResponse,
    CaseUpdate,
)
from caseprobe.models.common_schemas import failure_responses
from caseprobe.services.case_dispatcher import CaseDispatcher
from caseprobe.services.case_repository import (
    DEFAULT_LIMIT,
    DEFAULT_PAGE,
    MAX_LIMIT,
    MAX_PAGE,
    CaseRepository,
)

router = APIRouter(prefix="/cases", tags=["cases"])


def _envelope(case: Case) -> CaseEnvelope:
    return CaseEnvelope(data=CaseData(case=CaseResponse.model_validate(case)))


@router.get("", response_model=CaseListResponse, responses=failure_responses(401))
def list_cases(
    page: int = Query(DEFAULT_PAGE, ge=1, le=MAX_PAGE),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """当前用户的用例列表"""
    cases = CaseRepository(db).list(user.id, page=page, limit=limit)
    return CaseListResponse(
        results=len(cases),
        cases=[CaseResponse.model_validate(c) for c in cases],
    )


@router.post("/", response_model=CaseEnvelope, responses=failure_responses(401, 409))
def create_case(
    req: CaseCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """创建用例（所属用户为当前用户）"""
    return _envelope(CaseRepository(db).create(user.id, req))


@router.get("/{case_id}", response_model=CaseEnvelope, responses=failure_responses(404))
def get_case(case_id: UUID, db: Session = Depends(get_db)):
    """用例详情"""
    return _envelope(CaseRepository(db).get(case_id))


@router.patch("/{case_id}", response_model=CaseEnvelope, responses=failure_responses(404, 409))
def update_case(case_id: UUID, req: CaseUpdate, db: Session = Depends(get_db)):
    """部分更新用例"""
    return _envelope(CaseRepository(db).update(case_id, req))


@router.delete("/{case_id}", status_code=204, responses=failure_responses(404))
def delete_case(case_id: UUID, db: Session = Depends(get_db)):
    """删除用例"""
    CaseRepository(db).delete(case_id)
    return Response(status_code=204)


@router.get(
    "/{case_id}/test",
    response_model=CaseEnvelope,
    responses=failure_responses(404, 405, 500),
)
async def dispatch_case(
    case_id: UUID,
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
):
    """发送用例并记录响应"""
    dispatcher = CaseDispatcher(CaseRepository(db), client_factory=context.http_client)
    return _envelope(await dispatcher.dispatch(case_id))
