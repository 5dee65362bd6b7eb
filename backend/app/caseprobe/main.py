"""CaseProbe FastAPI application."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from caseprobe.api.routes import router as api_router
from caseprobe.core.context import AppContext
from caseprobe.core.errors import STATUS_FAIL, CaseProbeError, StorageError
from caseprobe.logging_config import setup_logging

logger = logging.getLogger(__name__)


async def caseprobe_error_handler(request: Request, exc: CaseProbeError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"数据库错误: {request.method} {request.url.path}: {exc}")
    return await caseprobe_error_handler(request, StorageError(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        fields.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return JSONResponse(
        status_code=422,
        content={"status": STATUS_FAIL, "message": "; ".join(fields) or "Invalid request"},
    )


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """构建 FastAPI 应用

    Args:
        context: 应用上下文；为空时从环境变量构建
    """
    context = context or AppContext.from_settings()
    settings = context.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """启动时配置日志并建表；关闭时释放连接池"""
        setup_logging(settings)
        logger.info(f"Environment: {settings.ENV}")
        logger.info(f"Database: {context.engine.url.render_as_string(hide_password=True)}")
        context.create_tables()
        logger.info("数据库初始化完成")
        yield
        logger.info("Shutting down service")
        context.dispose()

    app = FastAPI(
        title="CaseProbe",
        description="HTTP test case management and dispatch service",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CaseProbeError, caseprobe_error_handler)
    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(api_router)

    return app


app = create_app()
