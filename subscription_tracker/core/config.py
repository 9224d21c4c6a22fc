import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv(os.getenv("ENV_PATH", ".env"))
        self.environment = os.getenv("ENV", "development")
        self.log_level = os.getenv("LOG_LEVEL")
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = self._get_int("PORT", default=8080)
        self.shutdown_timeout = self._get_int("HTTP_TIMEOUT", default=30)

        self.database_url = os.getenv("DATABASE_URL")
        self.db_host = os.getenv("DB_HOST")
        self.db_port = self._get_int("DB_PORT", default=5432)
        self.db_user = os.getenv("DB_USER", "appuser")
        self.db_password = os.getenv("DB_PASSWORD", "123")
        self.db_name = os.getenv("DB_NAME", "subscriptions")
        self.db_sslmode = os.getenv("DB_SSLMODE", "disable")
        self.database_path = Path(os.getenv("DATABASE_PATH", "data/subscriptions.db")).resolve()

        origins = os.getenv("CORS_ALLOW_ORIGINS")
        if origins:
            self.cors_allow_origins = [item.strip() for item in origins.split(",") if item.strip()]
        else:
            self.cors_allow_origins = ["*"]

    @property
    def is_development(self) -> bool:
        return self.environment == "dev"

    def build_database_url(self) -> str:
        """Return DATABASE_URL, else a PostgreSQL URL from DB_* fields, else the SQLite file."""
        if self.database_url:
            return self.database_url
        if self.db_host:
            url = URL.create(
                "postgresql+psycopg",
                username=self.db_user,
                password=self.db_password,
                host=self.db_host,
                port=self.db_port,
                database=self.db_name,
                query={"sslmode": self.db_sslmode},
            )
            return url.render_as_string(hide_password=False)
        return f"sqlite:///{self.database_path}"

    @staticmethod
    def _get_int(key: str, default: Optional[int] = None) -> int:
        value = os.getenv(key)
        if value is None:
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be an integer") from exc
