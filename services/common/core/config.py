"""
Common Configuration
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppConfig(BaseSettings):
    """
    Common settings shared by every extension process.
    """

    LOG_LEVEL: str = Field(default="INFO", description="Log level")
    EXTENSION_API_TIMEOUT: float = Field(
        default=10.0, gt=0, description="Default timeout for Extensions API calls (seconds)"
    )

    # ===== Lambda Execution Environment =====
    AWS_LAMBDA_RUNTIME_API: str = Field(
        ..., description="host:port of the Lambda Runtime/Extensions API"
    )
    AWS_REGION: Optional[str] = Field(default=None, description="AWS region for service clients")

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )
