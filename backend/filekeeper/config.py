import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

_CONFIG_PATH = os.getenv("FILEKEEPER_CONFIG", "config.toml")
_ENV_PATH = os.getenv("FILEKEEPER_ENV", ".env")


class LinkSettings(BaseModel):
    scheme: str = "blob"
    namespace: str = "filekeeper"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FILEKEEPER_",
        env_nested_delimiter="__",
        toml_file=_CONFIG_PATH,
        env_file=_ENV_PATH,
        extra="ignore",
    )

    database_url: str = "sqlite:///filekeeper.db"
    echo_sql: bool = False
    logs_dir: Path = Field(default=Path("logs"))
    links: LinkSettings = Field(default_factory=LinkSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Source order: init args > OS env > .env > config.toml > secrets
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


settings = Settings()
