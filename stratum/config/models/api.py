"""API server configuration models."""

from pydantic import BaseModel, Field


class APIConfig(BaseModel):
    """API server configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")
    settings_cookie_enabled: bool = Field(
        default=True,
        description="Install the cookie settings middleware",
    )
