"""Cookie settings provider configuration."""

from typing import Literal

from pydantic import BaseModel, Field, SecretStr

SameSite = Literal["lax", "strict", "none"]


class CookieProviderConfig(BaseModel):
    """Configuration for the cookie-backed settings cache.

    The key material is a secret: provision it through
    STRATUM_COOKIE__SYMMETRIC_KEY_MATERIAL rather than TOML files.
    """

    symmetric_key_material: SecretStr | None = Field(
        default=None,
        description="Secret the token encryption key is derived from",
    )
    cookie_name: str = Field(default="stn", min_length=1, description="Cookie name")
    ttl: int = Field(default=86400, gt=0, description="Token and cookie lifetime in seconds")
    issuer: str = Field(default="settings_manager", description="Token issuer claim")
    subject: str = Field(default="cookie_provider", description="Token subject claim")
    footer: str | None = Field(default=None, description="Authenticated, unencrypted footer")
    path: str = Field(default="/", description="Cookie path")
    domain: str | None = Field(default=None, description="Cookie domain (host-only if unset)")
    secure: bool = Field(default=False, description="Send cookie over HTTPS only")
    http_only: bool = Field(default=True, description="Hide cookie from scripts")
    same_site: SameSite = Field(default="lax", description="Cookie SameSite attribute")
