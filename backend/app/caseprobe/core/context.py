"""CaseProbe - Application Context

应用级上下文：配置、数据库引擎、会话工厂以及外呼传输层。

上下文在启动时显式构建一次，挂在 app.state.context 上，请求只读共享。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx
from fastapi import Request
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from caseprobe.core.config import Settings
from caseprobe.database.config import build_engine, build_session_factory, init_db


@dataclass
class AppContext:
    """应用上下文"""
    settings: Settings
    engine: Engine
    session_factory: sessionmaker
    # 为 None 时使用 httpx 默认传输层；测试中替换为 MockTransport
    transport: Optional[httpx.AsyncBaseTransport] = None

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "AppContext":
        settings = settings or Settings()
        engine = build_engine(settings.DB_URL, echo=settings.DB_ECHO)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            transport=transport,
        )

    def create_tables(self) -> None:
        init_db(self.engine)

    def session(self) -> Session:
        return self.session_factory()

    def http_client(self) -> httpx.AsyncClient:
        """构建一次性的外呼客户端"""
        return httpx.AsyncClient(
            transport=self.transport,
            timeout=self.settings.DISPATCH_TIMEOUT,
            follow_redirects=True,
        )

    def dispose(self) -> None:
        self.engine.dispose()


def get_context(request: Request) -> AppContext:
    """FastAPI 依赖：获取应用上下文"""
    return request.app.state.context
