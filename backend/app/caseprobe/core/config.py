from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="CASEPROBE_", env_file=".env", extra="ignore")

    ENV: str = Field(default="dev")
    DB_URL: str = Field(default="sqlite:///./caseprobe.db")
    DB_ECHO: bool = Field(default=False)

    # 会话令牌
    JWT_SECRET_KEY: str = Field(default="change-me-in-production")
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_EXPIRES_IN_MINUTES: int = Field(default=60)
    JWT_MAXAGE_MINUTES: int = Field(default=60)

    # 用例发送：默认不设超时
    DISPATCH_TIMEOUT: Optional[float] = Field(default=None)

    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: Optional[str] = Field(default=None)

    CORS_ORIGINS: str = Field(default="*")
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    @property
    def cors_origins_list(self) -> List[str]:
        """逗号分隔的 CORS 来源列表"""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]
