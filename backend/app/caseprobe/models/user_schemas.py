"""CaseProbe - User Schemas

用户相关 Pydantic 模型
"""
from datetime import datetime
from typing import Literal
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserRegister(BaseModel):
    """用户注册"""
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserLogin(BaseModel):
    """用户登录"""
    email: str
    password: str


class FilteredUser(BaseModel):
    """用户响应（不含密码）"""
    id: UUID
    name: str
    email: str
    role: str
    photo: str
    verified: bool
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = ConfigDict(from_attributes=True)


class UserData(BaseModel):
    user: FilteredUser


class UserEnvelope(BaseModel):
    """单个用户响应"""
    status: Literal["success"] = "success"
    data: UserData


class TokenResponse(BaseModel):
    """登录响应"""
    status: Literal["success"] = "success"
    token: str
