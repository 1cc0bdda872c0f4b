"""
Ozon Seller 客户端配置管理
遵循约束：环境变量前缀 OZON__
"""
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache


class Settings(BaseSettings):
    """全局配置类"""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="OZON__",
        case_sensitive=False
    )

    # 凭证
    client_id: str = Field(default="")
    api_key: str = Field(default="")

    # HTTP
    base_url: str = Field(default="https://api-seller.ozon.ru")
    timeout: float = Field(default=30.0)

    # Monitoring
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")  # json or text
    timing_log_file: Optional[str] = Field(default=None)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v):
        """确保 base_url 为 http(s) 地址"""
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v):
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v

    @property
    def has_credentials(self) -> bool:
        """是否已配置 Client-Id 和 Api-Key"""
        return bool(self.client_id and self.api_key)


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()
