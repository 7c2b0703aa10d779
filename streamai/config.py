"""Application configuration using Pydantic Settings."""
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "StreamAI"
    debug: bool = False

    # JSON datastore
    data_file: str = "data.json"

    # JWT
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60 * 24

    # Secure link / edge delivery
    stream_signing_secret: str = ""
    stream_edge_base_url: str = ""  # e.g. "https://edge.example.com"
    stream_validity_seconds: int = 21600
    stream_internal_host_pattern: str = ""  # regex on the host of absolute video URLs
    stream_bind_client_ip: bool = False
    stream_manifest_extension: str = "m3u8"
    stream_catalog_timeout_seconds: float = 5.0

    # Trusted reverse proxy header carrying the client address (e.g. "X-Real-IP")
    client_ip_header: str = ""

    # CORS (comma-separated origins)
    cors_origins: str = "http://localhost:5173"

    @model_validator(mode="after")
    def _validate_production_secrets(self):
        if not self.debug:
            if self.jwt_secret_key in ("change-me-in-production", ""):
                raise ValueError(
                    "JWT_SECRET_KEY must be set to a strong secret when DEBUG is not enabled. "
                    "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
                )
        return self


class SigningConfig(BaseModel):
    """Immutable secure-link configuration handed to the stream authorizer."""

    model_config = ConfigDict(frozen=True)

    secret: str = ""
    edge_base_url: str = ""
    validity_seconds: int = Field(21600, gt=0)
    internal_host_pattern: str = ""
    bind_client_ip: bool = False
    manifest_extension: str = "m3u8"
    catalog_timeout_seconds: float = Field(5.0, gt=0)

    @classmethod
    def from_settings(cls, s: Settings) -> "SigningConfig":
        return cls(
            secret=s.stream_signing_secret,
            edge_base_url=s.stream_edge_base_url.rstrip("/"),
            validity_seconds=s.stream_validity_seconds,
            internal_host_pattern=s.stream_internal_host_pattern,
            bind_client_ip=s.stream_bind_client_ip,
            manifest_extension=s.stream_manifest_extension,
            catalog_timeout_seconds=s.stream_catalog_timeout_seconds,
        )


settings = Settings()
