"""配置与日志测试"""
import logging

from caseprobe.core.config import Settings
from caseprobe.logging_config import setup_logging


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.DB_URL == "sqlite:///./caseprobe.db"
    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.JWT_EXPIRES_IN_MINUTES == 60
    assert settings.DISPATCH_TIMEOUT is None


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("CASEPROBE_PORT", "9001")
    monkeypatch.setenv("CASEPROBE_DISPATCH_TIMEOUT", "2.5")

    settings = Settings(_env_file=None)

    assert settings.PORT == 9001
    assert settings.DISPATCH_TIMEOUT == 2.5


def test_cors_origins_list():
    assert Settings(_env_file=None, CORS_ORIGINS="*").cors_origins_list == ["*"]
    settings = Settings(_env_file=None, CORS_ORIGINS="http://a.test, http://b.test,")
    assert settings.cors_origins_list == ["http://a.test", "http://b.test"]


def test_setup_logging(tmp_path):
    log_file = tmp_path / "logs" / "caseprobe.log"

    logger = setup_logging(Settings(_env_file=None, LOG_FILE=str(log_file)))

    assert logger.name == "caseprobe"
    assert log_file.parent.is_dir()
    assert logging.getLogger("httpx").level == logging.WARNING
