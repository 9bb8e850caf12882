from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Webhook updates run with this key when set

    # Stripe
    stripe_secret_key: Optional[str] = None
    stripe_webhook_secret: Optional[str] = None
    stripe_publishable_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("stripe_publishable_key", "NEXT_PUBLIC_STRIPE_PUBLISHABLE_KEY"),
    )
    site_url: str = Field(
        default="http://localhost:3000",
        validation_alias=AliasChoices("site_url", "NEXT_PUBLIC_SITE_URL"),
    )

    # Gemini (no key -> every generator returns its mock content)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_timeout_seconds: float = 30.0

    # OpenAI (brand asset images)
    openai_api_key: Optional[str] = None
    openai_image_model: str = "dall-e-3"

    # App
    app_name: str = "octane-nexus"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    rate_limit_enabled: bool = True
    mock_auth_enabled: bool = False  # localhost "mock_session" tokens, never honoured in production

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def mock_auth_active(self) -> bool:
        return self.mock_auth_enabled and not self.is_production

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore",
        populate_by_name=True,
    )


settings = Settings()
