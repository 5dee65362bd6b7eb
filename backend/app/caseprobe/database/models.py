"""CaseProbe - Database Models

SQLAlchemy 数据模型定义
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from caseprobe.database.config import Base
from caseprobe.database import user_models  # noqa: F401 - 注册 User 模型


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Case(Base):
    """HTTP 测试用例模型

    保存一次外呼请求的定义，以及最近一次发送得到的响应。
    """
    __tablename__ = "cases"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False, unique=True)
    host = Column(String(100), nullable=False)
    uri = Column(String(200), nullable=False)
    method = Column(String(100), nullable=True)  # 不做枚举限制，发送时才校验
    request_body = Column(Text, nullable=True)
    expected_result = Column(Text, nullable=True)
    category = Column(String(100), nullable=True)
    response_code = Column(Text, nullable=True)  # 状态行，例如 "200 OK"
    response_body = Column(Text, nullable=True)
    used = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # 关联
    owner = relationship("User")
