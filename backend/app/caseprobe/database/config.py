"""CaseProbe - Database Configuration

数据库连接配置
"""
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# 创建 Base 类
Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """根据 URL 创建引擎

    SQLite 需要关闭 check_same_thread；内存库使用 StaticPool 共享同一连接。
    """
    kwargs = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """创建所有表"""
    # 注册模型
    from caseprobe.database import models, user_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    """获取数据库会话（依赖注入）"""
    db = request.app.state.context.session_factory()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
