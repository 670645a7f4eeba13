"""Centralized application configuration via Pydantic Settings.

Loads all env vars into a typed Settings instance: Supabase credentials,
the AI gateway and e-mail provider keys, and the locale/currency used when
rendering figures.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Supabase
    SUPABASE_URL: str = Field(..., description="Supabase project URL")
    SUPABASE_ANON_KEY: str = Field(..., description="Supabase anon/public key")

    # CORS
    ALLOWED_ORIGINS: str = Field(
        default="http://localhost:5173",
        description="Comma-separated allowed origins for CORS",
    )

    # AI gateway (OpenAI-compatible chat completions)
    AI_GATEWAY_URL: str = Field(
        default="https://ai.gateway.lovable.dev/v1/chat/completions",
        description="Chat completions endpoint",
    )
    AI_API_KEY: str = Field(default="", description="Bearer key for the AI gateway")
    AI_MODEL: str = Field(default="google/gemini-2.5-flash", description="Model name")

    # E-mail (Resend)
    RESEND_API_URL: str = Field(default="https://api.resend.com/emails")
    RESEND_API_KEY: str = Field(default="", description="Resend API key")
    REPORT_EMAIL_FROM: str = Field(default="Fineasy <onboarding@resend.dev>")

    # Currency conversion
    EXCHANGE_API_URL: str = Field(default="https://api.exchangerate.host/convert")

    HTTP_TIMEOUT_SECONDS: float = Field(default=30.0, description="Outbound HTTP timeout")

    # Presentation
    BASE_CURRENCY: str = Field(default="BRL")
    CURRENCY_SYMBOL: str = Field(default="R$")
    LOCALE: str = Field(default="pt-BR", description="pt-BR or en-US month names")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Python log level")
    ENVIRONMENT: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    # App
    APP_VERSION: str = Field(default="0.1.0", description="Application version")

    @property
    def allowed_origins(self) -> list[str]:
        """Parse comma-separated origins into a list."""
        return [o.strip() for o in self.ALLOWED_ORIGINS.split(",") if o.strip()]

    @property
    def log_level(self) -> str:
        return self.LOG_LEVEL

    @property
    def json_logs(self) -> bool:
        return self.ENVIRONMENT == "production"

    model_config = {"env_file": ".env", "extra": "ignore"}


@lru_cache
def get_settings() -> Settings:
    """Factory for Settings, overridable via dependency_overrides."""
    return Settings()


# Module-level singleton (lazy: only created when first accessed)
try:
    settings = get_settings()
except Exception:
    # Env vars may be unset under test; fixtures provide Settings
    settings = None  # type: ignore[assignment]
