import os
from pathlib import Path
from typing import Optional, Tuple, Type
from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

CONFIG_PATH_ENV = "CONFIG_PATH"


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be configured via .env file, environment variables or
    a YAML file named by the CONFIG_PATH environment variable.
    """

    # =============================================================================
    # APPLICATION
    # =============================================================================
    PROJECT_NAME: str = "Student Records API"
    APP_VERSION: str = "1.0.0"
    ENV: str = "local"
    DEBUG: bool = False
    API_PREFIX: str = ""

    # =============================================================================
    # SERVER
    # =============================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8082

    # =============================================================================
    # STORAGE
    # =============================================================================
    STORAGE_PATH: str = "storage/storage.db"

    # Database URL - set directly or built from STORAGE_PATH
    DATABASE_URL: Optional[str] = None

    DB_ECHO_SQL: bool = False

    # =============================================================================
    # LOGGING
    # =============================================================================
    LOG_LEVEL: str = "INFO"

    @field_validator("DATABASE_URL", mode="before")
    @classmethod
    def build_database_url(cls, v: Optional[str], info) -> str:
        """
        Build DATABASE_URL from STORAGE_PATH if not provided.

        Priority:
        1. Use DATABASE_URL if explicitly set in .env
        2. Build a SQLite URL pointing at STORAGE_PATH
        """
        if isinstance(v, str) and v:
            return v

        return f"sqlite:///{info.data.get('STORAGE_PATH')}"

    @field_validator("API_PREFIX")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """
        Add the YAML file named by CONFIG_PATH as the lowest-priority source.

        Priority:
        1. Values passed to Settings(...)
        2. Environment variables, then .env
        3. The YAML config file
        """
        config_path = os.environ.get(CONFIG_PATH_ENV)
        if not config_path:
            return init_settings, env_settings, dotenv_settings, file_secret_settings

        if not Path(config_path).is_file():
            raise FileNotFoundError(f"Config file does not exist: {config_path}")

        yaml_settings = YamlConfigSettingsSource(settings_cls, yaml_file=config_path)
        return init_settings, env_settings, dotenv_settings, yaml_settings, file_secret_settings


# Create global settings instance
settings = Settings()
