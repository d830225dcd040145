from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "URL Shortener"

    # Datastore
    DB_DRIVER: str = "mysql+pymysql"
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "shorter"

    # HTTP listener
    LISTEN_HOST: str = "0.0.0.0"
    LISTEN_PORT: int = 8080
    BASE_URL: str = "http://localhost"

    ADMIN_KEY: str = "DEFAULT_KEY"

    # Seconds; None waits on the upstream for as long as it takes
    RESOLVE_TIMEOUT: Optional[float] = None
    SHUTDOWN_TIMEOUT: int = 5
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def load_settings(config_file: Optional[str] = None) -> Settings:
    if config_file is None:
        return Settings()
    return Settings(_env_file=config_file)
