"""CaseProbe - Error Types

统一的错误类型定义。

所有业务错误都派生自 CaseProbeError，携带 HTTP 状态码、信封状态（fail/error）
和消息，由 main.py 中注册的异常处理器统一序列化为：

    {"status": "fail" | "error", "message": "..."}
"""
from __future__ import annotations

from typing import Any


STATUS_FAIL = "fail"
STATUS_ERROR = "error"


class CaseProbeError(Exception):
    """业务错误基类"""

    status_code: int = 500
    status: str = STATUS_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "message": self.message}


class NotFoundError(CaseProbeError):
    """用例或用户不存在"""
    status_code = 404
    status = STATUS_FAIL
    default_message = "Not found"


class ConflictError(CaseProbeError):
    """邮箱或用例标题重复"""
    status_code = 409
    status = STATUS_FAIL
    default_message = "Resource already exists"


class UnauthorizedError(CaseProbeError):
    """令牌缺失、无效或过期"""
    status_code = 401
    status = STATUS_FAIL
    default_message = "Invalid token"


class InvalidCredentialsError(CaseProbeError):
    """登录失败（不区分用户不存在与密码错误）"""
    status_code = 400
    status = STATUS_FAIL
    default_message = "Invalid email or password"


class MethodNotSupportedError(CaseProbeError):
    """用例的请求方法无法发送"""
    status_code = 405
    status = STATUS_ERROR

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Method: {method} is not supported")


class DispatchFailedError(CaseProbeError):
    """传输层失败（DNS、连接、超时、TLS 等）"""
    status_code = 500
    status = STATUS_ERROR

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Request failed: {cause!r}")


class StorageError(CaseProbeError):
    """持久化失败"""
    status_code = 500
    status = STATUS_ERROR

    def __init__(self, detail: Any = None):
        super().__init__(f"Database error: {detail}" if detail else "Database error")


def not_found_case(case_id: Any) -> NotFoundError:
    return NotFoundError(f"Case with ID: {case_id} not found")
