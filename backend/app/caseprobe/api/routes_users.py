"""CaseProbe - User Routes

用户信息 API 路由
"""
from fastapi import APIRouter, Depends

from caseprobe.api.deps.auth_deps import get_current_user
from caseprobe.database.user_models import User
from caseprobe.models.common_schemas import failure_responses
from caseprobe.models.user_schemas import FilteredUser, UserData, UserEnvelope

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserEnvelope, responses=failure_responses(401))
def get_me(user: User = Depends(get_current_user)):
    """获取当前用户"""
    return UserEnvelope(data=UserData(user=FilteredUser.model_validate(user)))
