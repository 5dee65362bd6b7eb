"""健康检查与应用生命周期测试"""
from fastapi.testclient import TestClient
from sqlalchemy import inspect

from caseprobe.api.routes import HEALTH_MESSAGE
from caseprobe.core.config import Settings
from caseprobe.core.context import AppContext
from caseprobe.main import create_app

from conftest import TEST_SECRET


def test_healthchecker_returns_static_payload(client):
    """存活探针无需认证，返回固定内容"""
    response = client.get("/api/healthchecker")

    assert response.status_code == 200
    assert response.json() == {"status": "success", "message": HEALTH_MESSAGE}


def test_startup_creates_tables(tmp_path):
    """启动时建表，之后即可注册"""
    settings = Settings(
        _env_file=None,
        DB_URL=f"sqlite:///{tmp_path / 'app.db'}",
        JWT_SECRET_KEY=TEST_SECRET,
    )
    context = AppContext.from_settings(settings)

    with TestClient(create_app(context)) as client:
        tables = set(inspect(context.engine).get_table_names())
        response = client.post(
            "/api/auth/register",
            json={"name": "Alice", "email": "alice@mail.com", "password": "pw"},
        )

    assert {"users", "cases"} <= tables
    assert response.status_code == 200
