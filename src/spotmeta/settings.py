"""Environment settings using pydantic-settings."""

from functools import cache
from typing import Annotated, Literal

from pydantic import BeforeValidator, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from spotmeta.config import BackendConfig, ResolutionDepth, ResolverConfig

LogLevel = Annotated[
    Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SPOTMETA_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Backend settings
    host: str = Field(default="localhost:8080", description="Backend host")
    password: str = Field(default="", description="Backend access credential")
    service: str = Field(default="spotify", description="Service name in URIs")
    scheme: Literal["http", "https"] = Field(
        default="http", description="Backend URL scheme"
    )
    embed_url: str = Field(
        default="https://embed.spotify.com/oembed", description="oEmbed endpoint"
    )
    timeout: float = Field(default=30.0, gt=0, description="Request timeout (s)")

    # Resolution settings
    depth: ResolutionDepth = Field(
        default=ResolutionDepth.ONE_LEVEL, description="Nested resolution depth"
    )
    max_workers: int = Field(default=1, ge=1, description="Sibling fetch threads")

    log_level: LogLevel = Field(default="WARNING", description="Log level")

    def backend_config(self) -> BackendConfig:
        return BackendConfig(
            host=self.host,
            password=self.password,
            service=self.service,
            scheme=self.scheme,
            embed_url=self.embed_url,
            timeout=self.timeout,
        )

    def resolver_config(self) -> ResolverConfig:
        return ResolverConfig(depth=self.depth, max_workers=self.max_workers)


@cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
