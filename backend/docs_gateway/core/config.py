"""Configuration settings for the Microsoft Docs gateway."""
from typing import Annotated
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """Application settings with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)
    debug: bool = Field(default=False)

    # Microsoft Docs MCP Configuration
    microsoft_docs_endpoint_url: str = Field(
        default="https://learn.microsoft.com/api/mcp",
        description="Microsoft Learn MCP server URL"
    )
    mcp_transport: str = Field(
        default="http",
        description="MCP transport: 'sse' or 'http' (streamable HTTP)"
    )
    mcp_timeout_seconds: float = Field(default=300.0, gt=0)
    mcp_user_agent: str = Field(default="Enterprise Microsoft Docs MCP Client/1.0")

    # Caching & Retry Settings
    mcp_enable_retry: bool = Field(default=True)
    mcp_max_retry_attempts: int = Field(default=3, ge=0)
    enable_caching: bool = Field(default=False)
    cache_expiry_minutes: int = Field(default=30, ge=0)

    # CORS Settings
    allowed_origins: Annotated[list[str], NoDecode] = Field(
        default=["http://localhost:3000", "https://localhost:3000"]
    )

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v):
        """Parse comma-separated origins from env var."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("mcp_transport")
    @classmethod
    def validate_transport(cls, v: str) -> str:
        value = v.strip().lower()
        if value not in ("sse", "http"):
            raise ValueError(f"Unsupported MCP transport '{v}'")
        return value


# Global settings instance
settings = Settings()
