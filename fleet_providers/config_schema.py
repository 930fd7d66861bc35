from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderConfig(BaseModel):
    """Standard configuration structure for all fleet providers"""
    model_config = ConfigDict(populate_by_name=True, extra='allow')

    api_url: str = Field(..., alias='API_URL', description="Endpoint the provider posts to")
    api_key: Optional[str] = Field(
        None,
        alias='API_KEY',
        repr=False,
        description="Bearer credential, read from the environment"
    )
    timeout: float = Field(30.0, alias='TIMEOUT', gt=0, description="Request timeout in seconds")

    @field_validator('api_url')
    @classmethod
    def validate_api_url(cls, value: str) -> str:
        if not value.startswith(('http://', 'https://')):
            raise ValueError(f"API_URL must be an http(s) URL, got {value!r}")
        return value

    @field_validator('api_key')
    @classmethod
    def strip_api_key(cls, value: Optional[str]) -> Optional[str]:
        # Empty or whitespace-only keys count as missing
        if value is not None:
            value = value.strip()
        return value or None


def validate_provider_config(config: Dict) -> ProviderConfig:
    """Validate and normalize provider configuration"""
    return ProviderConfig(**config)
