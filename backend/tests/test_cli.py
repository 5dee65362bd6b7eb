"""命令行测试"""
from uuid import uuid4

import httpx
import pytest
from typer.testing import CliRunner

from caseprobe import cli
from caseprobe.core.config import Settings
from caseprobe.core.context import AppContext
from caseprobe.database.user_models import User
from caseprobe.models.case_schemas import CaseCreate
from caseprobe.services.auth_service import AuthService
from caseprobe.services.case_repository import CaseRepository

from conftest import TEST_SECRET, OutboundRecorder, case_payload

runner = CliRunner()


@pytest.fixture
def file_settings(tmp_path):
    return Settings(
        _env_file=None,
        DB_URL=f"sqlite:///{tmp_path / 'cli.db'}",
        JWT_SECRET_KEY=TEST_SECRET,
    )


@pytest.fixture
def cli_outbound(monkeypatch, file_settings):
    """让命令行使用临时文件库与 MockTransport"""
    recorder = OutboundRecorder()
    monkeypatch.setattr(
        cli,
        "_context",
        lambda: AppContext.from_settings(file_settings, transport=httpx.MockTransport(recorder)),
    )
    return recorder


@pytest.fixture
def saved_case(file_settings, cli_outbound):
    """建表并写入一条用例"""
    context = AppContext.from_settings(file_settings)
    context.create_tables()
    db = context.session()
    try:
        owner = User(name="Cli", email="cli@mail.com", password=AuthService.hash_password("x"))
        db.add(owner)
        db.commit()
        case = CaseRepository(db).create(owner.id, CaseCreate(**case_payload(title="cli case")))
        yield case.id
    finally:
        db.close()
        context.dispose()


def test_init_db(file_settings, cli_outbound, tmp_path):
    result = runner.invoke(cli.app, ["init-db"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "cli.db").exists()


def test_dispatch(saved_case, cli_outbound):
    result = runner.invoke(cli.app, ["dispatch", str(saved_case)])

    assert result.exit_code == 0, result.output
    assert "cli case: 200 OK" in result.output
    assert "pong" in result.output
    assert len(cli_outbound.requests) == 1


def test_dispatch_missing_case(saved_case, cli_outbound):
    missing = uuid4()

    result = runner.invoke(cli.app, ["dispatch", str(missing)])

    assert result.exit_code == 1
    assert f"Case with ID: {missing} not found" in result.output
    assert cli_outbound.requests == []


def test_dispatch_invalid_id(cli_outbound):
    result = runner.invoke(cli.app, ["dispatch", "not-a-uuid"])

    assert result.exit_code != 0
