"""CaseProbe - User Models

用户数据模型
"""
from datetime import datetime, timezone
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID
import uuid

from caseprobe.database.config import Base


DEFAULT_ROLE = "user"
DEFAULT_PHOTO = "default.png"


class User(Base):
    """用户模型"""
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)  # 小写存储
    photo = Column(String(255), nullable=False, default=DEFAULT_PHOTO)
    verified = Column(Boolean, default=False, nullable=False)
    password = Column(String(255), nullable=False)  # scrypt 哈希
    role = Column(String(50), nullable=False, default=DEFAULT_ROLE)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
