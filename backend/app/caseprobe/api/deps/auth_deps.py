"""CaseProbe - 认证依赖

提供 get_auth_service 与 get_current_user 依赖
"""
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from caseprobe.core.context import AppContext, get_context
from caseprobe.core.errors import UnauthorizedError
from caseprobe.database.config import get_db
from caseprobe.database.user_models import User
from caseprobe.services.auth_service import AuthService

TOKEN_COOKIE = "token"


def get_auth_service(context: AppContext = Depends(get_context)) -> AuthService:
    return AuthService(context.settings)


def extract_tokens(request: Request, authorization: Optional[str]) -> list[str]:
    """候选令牌：先 token cookie，后 Authorization: Bearer 头"""
    tokens = []
    cookie = request.cookies.get(TOKEN_COOKIE)
    if cookie:
        tokens.append(cookie)
    if authorization and authorization.startswith("Bearer "):
        bearer = authorization.removeprefix("Bearer ").strip()
        if bearer and bearer not in tokens:
            tokens.append(bearer)
    return tokens


async def get_current_user(
    request: Request,
    authorization: Optional[str] = Header(default=None, alias="Authorization"),
    db: Session = Depends(get_db),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    """解析当前用户，并挂到 request.state.user

    cookie 无法通过校验时回退到 Bearer 头。

    Raises:
        UnauthorizedError: 未提供令牌、令牌无效/过期，或令牌对应的用户不存在
    """
    tokens = extract_tokens(request, authorization)
    if not tokens:
        raise UnauthorizedError("You are not logged in, please provide token")

    payload = next(
        (p for p in map(auth_service.decode_jwt_token, tokens) if p),
        None,
    )
    if not payload:
        raise UnauthorizedError("Invalid token")

    user = auth_service.get_user_by_id(db, payload["sub"])
    if not user:
        raise UnauthorizedError("The user belonging to this token no longer exists")

    request.state.user = user
    return user
