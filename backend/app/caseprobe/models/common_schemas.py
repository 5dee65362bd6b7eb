"""CaseProbe - Common Schemas

通用的响应信封模型
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


STATUS_SUCCESS = "success"


class StatusResponse(BaseModel):
    """仅包含状态的响应"""
    status: Literal["success"] = STATUS_SUCCESS


class MessageResponse(BaseModel):
    """带消息的成功响应"""
    status: Literal["success"] = STATUS_SUCCESS
    message: str


class FailureResponse(BaseModel):
    """失败响应（用于 OpenAPI 文档）"""
    status: Literal["fail", "error"] = Field(..., description="fail: 调用方错误；error: 服务端错误")
    message: str


def failure_responses(*codes: int) -> dict[int, dict]:
    """为路由生成统一的失败响应文档"""
    return {code: {"model": FailureResponse} for code in codes}
