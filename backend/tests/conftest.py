"""
CaseProbe 测试配置

每个测试使用独立的内存 SQLite 库；外呼请求由 httpx.MockTransport 接管。
"""
from uuid import uuid4

import httpx
import pytest
from fastapi.testclient import TestClient

from caseprobe.core.config import Settings
from caseprobe.core.context import AppContext
from caseprobe.database.config import Base
from caseprobe.database.user_models import User
from caseprobe.main import create_app
from caseprobe.services.auth_service import AuthService

TEST_SECRET = "caseprobe-test-secret"
DEFAULT_PASSWORD = "s3cret-pass"


class OutboundRecorder:
    """记录外呼请求并返回可替换的预设响应"""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.handler = lambda request: httpx.Response(200, text="pong")

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def settings():
    return Settings(_env_file=None, DB_URL="sqlite://", JWT_SECRET_KEY=TEST_SECRET)


@pytest.fixture
def outbound():
    """外呼记录器；测试可替换 outbound.handler"""
    return OutboundRecorder()


@pytest.fixture
def context(settings, outbound):
    """提供应用上下文，测试前建表，测试后清理"""
    ctx = AppContext.from_settings(settings, transport=httpx.MockTransport(outbound))
    ctx.create_tables()
    yield ctx
    Base.metadata.drop_all(bind=ctx.engine)
    ctx.dispose()


@pytest.fixture
def db(context):
    """提供数据库会话"""
    session = context.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(context):
    return create_app(context)


@pytest.fixture
def client(app):
    """提供测试客户端"""
    return TestClient(app)


@pytest.fixture
def auth_service(settings):
    return AuthService(settings)


@pytest.fixture
def make_user(db):
    """直接写库创建用户"""
    def _make_user(email: str | None = None, password: str = DEFAULT_PASSWORD) -> User:
        user = User(
            id=uuid4(),
            name="Test User",
            email=email or f"user_{uuid4().hex[:8]}@mail.com",
            password=AuthService.hash_password(password),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def register(client):
    """通过 API 注册用户"""
    def _register(name: str = "Alice", email: str = "alice@mail.com", password: str = DEFAULT_PASSWORD):
        return client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
    return _register


@pytest.fixture
def login(client):
    """通过 API 登录（成功后 cookie 保存在 client 中）"""
    def _login(email: str = "alice@mail.com", password: str = DEFAULT_PASSWORD):
        return client.post("/api/auth/login", json={"email": email, "password": password})
    return _login


@pytest.fixture
def auth_client(client, register, login):
    """已登录的测试客户端"""
    assert register().status_code == 200
    assert login().status_code == 200
    return client


def case_payload(**overrides) -> dict:
    payload = {
        "title": f"case-{uuid4().hex[:8]}",
        "host": "http://example.test",
        "uri": "/ping",
        "method": "GET",
        "request_body": "",
        "expected_result": "pong",
        "category": "smoke",
    }
    payload.update(overrides)
    return payload
