"""CaseProbe - Case Schemas

HTTP 测试用例相关的 Pydantic 数据模型
"""
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


# ============================================================
# Request Schemas
# ============================================================

class CaseCreate(BaseModel):
    """创建用例请求

    所属用户总是当前登录用户，请求体中的 user_id 会被忽略。
    """
    title: str = Field(..., min_length=1, max_length=255)
    host: str = Field(..., min_length=1, max_length=100, description="目标主机，含协议，例如 http://example.com")
    uri: str = Field(..., max_length=200, description="请求路径，与 host 直接拼接")
    method: str = Field(default="GET", max_length=100, description="请求方法；仅 GET/POST 可发送")
    request_body: str = Field(default="", description="POST 时原样发送的请求体")
    expected_result: str = Field(default="")
    category: Optional[str] = Field(None, max_length=100)


class CaseUpdate(BaseModel):
    """更新用例请求（未提供或为 null 的字段保持原值）"""
    user_id: Optional[UUID] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    host: Optional[str] = Field(None, min_length=1, max_length=100)
    uri: Optional[str] = Field(None, max_length=200)
    method: Optional[str] = Field(None, max_length=100)
    request_body: Optional[str] = None
    expected_result: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    response_code: Optional[str] = None
    response_body: Optional[str] = None
    used: Optional[bool] = None


# ============================================================
# Response Schemas
# ============================================================

class CaseResponse(BaseModel):
    """用例响应"""
    id: UUID
    user_id: UUID
    title: str
    host: str
    uri: str
    method: Optional[str]
    request_body: Optional[str]
    expected_result: Optional[str]
    category: Optional[str]
    response_code: Optional[str]
    response_body: Optional[str]
    used: bool
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = ConfigDict(from_attributes=True)


class CaseData(BaseModel):
    case: CaseResponse


class CaseEnvelope(BaseModel):
    """单个用例响应"""
    status: Literal["success"] = "success"
    data: CaseData


class CaseListResponse(BaseModel):
    """用例列表响应"""
    status: Literal["success"] = "success"
    results: int
    cases: list[CaseResponse]
