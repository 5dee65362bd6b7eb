"""CaseProbe - Auth Service

认证服务：密码哈希、用户注册/登录、JWT 签发与校验
"""
import base64
import hashlib
import hmac
import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from caseprobe.core.config import Settings
from caseprobe.core.errors import ConflictError, InvalidCredentialsError
from caseprobe.database.user_models import User

logger = logging.getLogger(__name__)

# scrypt 参数（内存困难型哈希）
SCRYPT_N = 2 ** 14
SCRYPT_R = 8
SCRYPT_P = 1
SALT_BYTES = 16
HASH_BYTES = 64
HASH_SCHEME = "scrypt"

USER_EXISTS_MESSAGE = "User with that email already exists"


def _b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def _scrypt(password: str, salt: bytes, n: int, r: int, p: int) -> bytes:
    return hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt,
        n=n,
        r=r,
        p=p,
        maxmem=256 * n * r,
        dklen=HASH_BYTES,
    )


class AuthService:
    """认证服务"""

    def __init__(self, settings: Settings):
        self.settings = settings

    # ========== 密码 ==========

    @staticmethod
    def hash_password(password: str) -> str:
        """密码哈希（随机盐）

        格式: scrypt$<n>$<r>$<p>$<salt>$<hash>
        """
        salt = os.urandom(SALT_BYTES)
        digest = _scrypt(password, salt, SCRYPT_N, SCRYPT_R, SCRYPT_P)
        return "$".join([
            HASH_SCHEME,
            str(SCRYPT_N),
            str(SCRYPT_R),
            str(SCRYPT_P),
            _b64encode(salt),
            _b64encode(digest),
        ])

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """验证密码；存储的哈希格式不合法时返回 False"""
        try:
            scheme, n, r, p, salt, digest = hashed_password.split("$")
            if scheme != HASH_SCHEME:
                return False
            expected = base64.b64decode(digest)
            actual = _scrypt(plain_password, base64.b64decode(salt), int(n), int(r), int(p))
        except (ValueError, TypeError):
            return False
        return hmac.compare_digest(actual, expected)

    # ========== JWT 相关方法 ==========

    def create_jwt_token(self, user: User) -> str:
        """创建 JWT 令牌

        Args:
            user: 用户对象

        Returns:
            JWT 令牌字符串
        """
        now = datetime.now(timezone.utc)
        expires_at = now + timedelta(minutes=self.settings.JWT_EXPIRES_IN_MINUTES)

        payload: Dict[str, Any] = {
            "sub": str(user.id),  # 主题：用户ID
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        return jwt.encode(
            payload,
            self.settings.JWT_SECRET_KEY,
            algorithm=self.settings.JWT_ALGORITHM,
        )

    def decode_jwt_token(self, token: str) -> Optional[Dict[str, Any]]:
        """解码并验证 JWT 令牌（签名与过期时间）

        Returns:
            解码后的 payload 字典，验证失败返回 None
        """
        try:
            return jwt.decode(
                token,
                self.settings.JWT_SECRET_KEY,
                algorithms=[self.settings.JWT_ALGORITHM],
                options={"require": ["sub", "exp"]},
            )
        except InvalidTokenError:
            return None

    @staticmethod
    def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
        """按令牌主题查询用户；主题不是合法 UUID 时返回 None"""
        try:
            uid = UUID(str(user_id))
        except ValueError:
            return None
        return db.query(User).filter(User.id == uid).first()

    # ========== 注册 / 登录 ==========

    def register_user(self, db: Session, name: str, email: str, password: str) -> User:
        """注册用户

        Raises:
            ConflictError: 邮箱（忽略大小写）已存在
        """
        email = email.lower()
        if db.query(User).filter(User.email == email).first():
            raise ConflictError(USER_EXISTS_MESSAGE)

        user = User(
            name=name,
            email=email,
            password=self.hash_password(password),
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError as e:
            # 并发注册同一邮箱
            db.rollback()
            raise ConflictError(USER_EXISTS_MESSAGE) from e
        db.refresh(user)

        logger.info(f"用户注册成功: {user.id}")
        return user

    def authenticate_user(self, db: Session, email: str, password: str) -> User:
        """认证用户

        Raises:
            InvalidCredentialsError: 用户不存在或密码错误（两种情况不做区分）
        """
        user = db.query(User).filter(User.email == email.lower()).first()
        if not user or not self.verify_password(password, user.password):
            logger.info("登录失败：邮箱或密码错误")
            raise InvalidCredentialsError()
        return user
