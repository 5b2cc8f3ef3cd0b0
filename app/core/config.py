
from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "Wedding Planner API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = Field(default="http://localhost:5173", alias="SITE_URL")

    # OpenAI
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4", alias="OPENAI_MODEL")
    openai_max_tokens: int = Field(default=1000, alias="OPENAI_MAX_TOKENS")
    openai_timeout: int = Field(default=60, alias="OPENAI_TIMEOUT")

    # Resend (transactional email)
    resend_api_key: str | None = Field(default=None, alias="RESEND_API_KEY")
    email_from_address: str | None = Field(default=None, alias="EMAIL_FROM_ADDRESS")
    bulk_send_delay_ms: int = Field(
        default=100, alias="BULK_SEND_DELAY_MS",
    )  # Resend allows a handful of requests per second

    # Wedding display defaults
    wedding_name: str = Field(default="Sarah's Wedding", alias="WEDDING_PLANNER_NAME")
    wedding_date: str = Field(default="September 15, 2024", alias="WEDDING_DATE")
    planner_name: str = Field(default="Sarah Johnson", alias="PLANNER_NAME")
    guest_count: int = Field(default=150, alias="WEDDING_GUEST_COUNT")
    wedding_style: str = Field(
        default="Elegant garden-themed wedding with soft pastels",
        alias="WEDDING_STYLE",
    )

    # Database (hosted Postgres via asyncpg, or SQLite for local dev)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./wedding_planner_dev.db",
        alias="DATABASE_URL",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def ai_enabled(self) -> bool:
        """AI drafting is available only when an OpenAI key is configured."""
        return bool(self.openai_api_key)

    @property
    def email_enabled(self) -> bool:
        return bool(self.resend_api_key)

    @property
    def default_sender(self) -> str:
        address = self.email_from_address or "noreply@weddingplanner.com"
        return f"{self.wedding_name} <{address}>"

settings = Settings()
