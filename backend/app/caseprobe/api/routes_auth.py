"""CaseProbe - 认证相关路由

注册、登录与登出
"""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from caseprobe.api.deps.auth_deps import TOKEN_COOKIE, get_auth_service, get_current_user
from caseprobe.core.context import AppContext, get_context
from caseprobe.database.config import get_db
from caseprobe.models.common_schemas import StatusResponse, failure_responses
from caseprobe.models.user_schemas import (
    FilteredUser,
    TokenResponse,
    UserData,
    UserEnvelope,
    UserLogin,
    UserRegister,
)
from caseprobe.services.auth_service import AuthService


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserEnvelope, responses=failure_responses(409))
def register(
    body: UserRegister,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
):
    """用户注册"""
    user = auth_service.register_user(db, body.name, body.email, body.password)
    return UserEnvelope(data=UserData(user=FilteredUser.model_validate(user)))


@router.post("/login", response_model=TokenResponse, responses=failure_responses(400))
def login(
    credentials: UserLogin,
    response: Response,
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
    context: AppContext = Depends(get_context),
):
    """用户登录

    签发令牌，同时写入 http-only cookie
    """
    user = auth_service.authenticate_user(db, credentials.email, credentials.password)
    token = auth_service.create_jwt_token(user)

    response.set_cookie(
        key=TOKEN_COOKIE,
        value=token,
        max_age=context.settings.JWT_MAXAGE_MINUTES * 60,
        path="/",
        httponly=True,
        samesite="lax",
    )
    return TokenResponse(token=token)


@router.get(
    "/logout",
    response_model=StatusResponse,
    responses=failure_responses(401),
    dependencies=[Depends(get_current_user)],
)
def logout(response: Response):
    """用户登出

    令牌本身无状态，这里用一个已过期的空 cookie 覆盖客户端的 cookie。
    """
    response.set_cookie(
        key=TOKEN_COOKIE,
        value="",
        max_age=-3600,
        path="/",
        httponly=True,
        samesite="lax",
    )
    return StatusResponse()
