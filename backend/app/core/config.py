from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Milestone Tracker"
    debug: bool = False
    port: int = 3000

    # Logging
    log_level: str = "INFO"
    # INFO logs every SQL statement; debug mode forces it
    sql_log_level: str = "WARNING"

    # CORS
    cors_origins: list[str] = ["*"]

    # Database
    db_driver: str = "mysql+aiomysql"
    db_host: str = "localhost"
    db_port: int = 3306
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "milestones"
    db_pool_size: int = 10
    # Full URL override, takes precedence over the DB_* parts (tests use SQLite)
    database_url: str = ""

    # Uploads
    upload_dir: str = "uploads"
    max_upload_bytes: int = 5 * 1024 * 1024

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return URL.create(
            self.db_driver,
            username=self.db_user,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        ).render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
