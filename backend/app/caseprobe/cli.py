from __future__ import annotations

import asyncio
from typing import NoReturn, Optional
from uuid import UUID

import typer
from rich import print

from caseprobe.core.config import Settings
from caseprobe.core.context import AppContext
from caseprobe.core.errors import CaseProbeError
from caseprobe.services.case_dispatcher import CaseDispatcher
from caseprobe.services.case_repository import CaseRepository

app = typer.Typer(add_completion=False, help="CaseProbe CLI")


# ============================================================
# 小工具：日志
# ============================================================
def _info(msg: str) -> None:
    print(f"[cyan][CP][/cyan] {msg}")


def _ok(msg: str) -> None:
    print(f"[green][CP][OK][/green] {msg}")


def _fail(msg: str, code: int = 1) -> NoReturn:
    print(f"[red][CP][FAIL][/red] {msg}")
    raise typer.Exit(code)


def _context() -> AppContext:
    return AppContext.from_settings()


# ============================================================
# 命令
# ============================================================
@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="监听地址，默认取配置 HOST"),
    port: Optional[int] = typer.Option(None, help="监听端口，默认取配置 PORT"),
    reload: bool = typer.Option(False, help="开发模式热重载"),
) -> None:
    """启动 API 服务"""
    import uvicorn

    settings = Settings()
    host = host or settings.HOST
    port = port or settings.PORT
    _info(f"启动服务: http://{host}:{port}")
    uvicorn.run("caseprobe.main:app", host=host, port=port, reload=reload)


@app.command("init-db")
def init_db() -> None:
    """创建所有数据表"""
    context = _context()
    try:
        context.create_tables()
    finally:
        context.dispose()
    _ok("数据表已创建")


@app.command()
def dispatch(case_id: UUID = typer.Argument(..., help="用例 ID")) -> None:
    """发送已保存的用例并打印响应"""
    context = _context()
    db = context.session()
    try:
        dispatcher = CaseDispatcher(CaseRepository(db), client_factory=context.http_client)
        case = asyncio.run(dispatcher.dispatch(case_id))
    except CaseProbeError as e:
        _fail(e.message)
    finally:
        db.close()
        context.dispose()

    _ok(f"{case.title}: {case.response_code}")
    typer.echo(case.response_body)


if __name__ == "__main__":
    app()
