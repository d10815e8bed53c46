"""
Application Configuration

Environment-driven settings for the database, SMTP transport and the school
identity strings used in email templates and signatures.
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# Load .env from apps/api so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent.parent / ".env"

# Sync-driver schemes upgraded to their async counterparts
_ASYNC_SCHEMES = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "mysql://": "mysql+aiomysql://",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    python_env: str = "production"
    app_timezone: str = "Africa/Lagos"
    log_level: str = "INFO"
    log_dir: str = "logs"

    # Database: a single DSN wins over the individual parts
    database_url: str | None = None
    db_driver: str = "postgresql+asyncpg"
    db_host: str = "127.0.0.1"
    db_port: int = 5432
    db_name: str = "beautiful_minds_school"
    db_user: str = "beautiful_minds_web"
    db_pass: str = ""
    db_connect_retries: int = 3
    db_connect_retry_delay: float = 2.0
    db_create_tables: bool = False

    # School identity
    school_name: str = "Beautiful Minds Schools"
    school_email: str = "beautifulmindsschools@gmail.com"
    school_phone: str = "+234 703 354 6935 | +234 703 095 1884"
    school_address: str = "John Edia Str, Ankpa Qtrs Extension, Makurdi, Nigeria"
    notification_email: str | None = None

    # SMTP (primary transport)
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_secure: str = "tls"  # tls | ssl | none
    smtp_user: str | None = None
    smtp_pass: str | None = None
    smtp_from: str | None = None
    smtp_from_name: str | None = None
    smtp_timeout: float = 15.0

    # Resend (fallback transport, no SMTP involved)
    resend_api_key: str | None = None

    @property
    def is_production(self) -> bool:
        return self.python_env.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.python_env.lower() == "development"

    @property
    def sqlalchemy_database_url(self) -> str | URL:
        """Async SQLAlchemy URL built from DATABASE_URL or the DB_* parts."""
        if self.database_url:
            for scheme, async_scheme in _ASYNC_SCHEMES.items():
                if self.database_url.startswith(scheme):
                    return self.database_url.replace(scheme, async_scheme, 1)
            return self.database_url

        return URL.create(
            drivername=self.db_driver,
            username=self.db_user,
            password=self.db_pass or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )

    @property
    def mail_from(self) -> str:
        return self.smtp_from or self.school_email

    @property
    def mail_from_name(self) -> str:
        return self.smtp_from_name or self.school_name

    @property
    def notification_recipient(self) -> str:
        return self.notification_email or self.mail_from


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
