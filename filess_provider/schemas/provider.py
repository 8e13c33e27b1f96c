"""Pydantic schema for the provider configuration block."""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

DEFAULT_API_URL = "https://backend.filess.io"


class ProviderSettings(BaseModel):
    """Settings used to build the filess.io API session."""

    api_token: SecretStr = Field(
        default_factory=lambda: SecretStr(os.getenv("FILESS_API_TOKEN", "")),
        description="API token for filess.io authentication",
    )
    api_url: str = Field(
        default_factory=lambda: os.getenv("FILESS_API_URL", DEFAULT_API_URL),
        description="Base URL for filess.io API",
    )
    timeout: Optional[float] = Field(None, gt=0, description="Per-request timeout in seconds")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "api_token": "fls_xxxxxxxx",
                "api_url": DEFAULT_API_URL,
            }
        }
    )
