"""
Tests for settings loading.
"""

from pathlib import Path

from pydantic_settings import SettingsConfigDict

from filekeeper.config import Settings
from filekeeper.db.database import create_engine


def test_defaults(monkeypatch):
    monkeypatch.delenv("FILEKEEPER_DATABASE_URL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite:///filekeeper.db"
    assert settings.echo_sql is False
    assert settings.logs_dir == Path("logs")
    assert settings.links.scheme == "blob"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("FILEKEEPER_DATABASE_URL", "sqlite:////tmp/other.db")
    monkeypatch.setenv("FILEKEEPER_LINKS__NAMESPACE", "vault")

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite:////tmp/other.db"
    assert settings.links.namespace == "vault"


def test_toml_file(tmp_path, monkeypatch):
    monkeypatch.delenv("FILEKEEPER_DATABASE_URL", raising=False)
    config_file = tmp_path / "config.toml"
    config_file.write_text(
        'database_url = "sqlite:///from-toml.db"\n'
        "echo_sql = true\n"
        "\n"
        "[links]\n"
        'scheme = "share"\n'
    )

    class TomlSettings(Settings):
        model_config = SettingsConfigDict(toml_file=config_file)

    settings = TomlSettings(_env_file=None)

    assert settings.database_url == "sqlite:///from-toml.db"
    assert settings.echo_sql is True
    assert settings.links.scheme == "share"
    assert settings.links.namespace == "filekeeper"


def test_engine_uses_aiosqlite_driver(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'x.db'}")
    assert engine.url.drivername == "sqlite+aiosqlite"

    already_async = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'y.db'}")
    assert already_async.url.drivername == "sqlite+aiosqlite"
