"""
Application settings loaded from environment variables.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./jobboard.db"
    database_echo: bool = False
    store_timeout_seconds: float = 10.0

    # ── Password hashing / reset tokens ──────────────────────────────────
    bcrypt_rounds: int = 10
    reset_token_ttl_seconds: int = 3600                  # 1 hour
    reset_link_base: str = "http://localhost:3000/reset-password"

    # ── Mail transport ───────────────────────────────────────────────────
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    email_user: str = ""                                 # SMTP login, also the sender address
    email_pass: str = ""
    mail_from_name: str = "Support Team"
    notification_timeout_seconds: float = 10.0

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 5000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def smtp_configured(self) -> bool:
        return bool(self.email_user and self.email_pass)

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


config = Settings()
