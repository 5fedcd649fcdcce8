"""Application settings loaded from environment variables."""

import logging
import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from memopad.errors import ConfigurationFailure

logger = logging.getLogger(__name__)


def _env_file() -> str | None:
    if os.getenv("PYTEST_CURRENT_TEST"):
        return None
    return ".env"


class Settings(BaseSettings):
    """Memo pad configuration. All values come from environment variables."""

    # Shared-group storage
    app_group_id: str = Field(default="group.com.shuhei.digitalmemopad")
    shared_container_root: Path = Field(default=Path("data/groups"))
    database_name: str = Field(default="DigitalMemoPad")

    # Database
    busy_timeout_ms: int = Field(default=5000)

    # Widget timeline
    recent_limit: int = Field(default=5)
    warning_hours: float = Field(default=3)
    alarm_hours: float = Field(default=5)
    fallback_refresh_minutes: int = Field(default=60)

    # Logging
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(env_file=_env_file(), env_file_encoding="utf-8")

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        if os.getenv("PYTEST_CURRENT_TEST"):
            return (init_settings,)
        return (init_settings, env_settings, dotenv_settings, file_secret_settings)

    def shared_container(self) -> Path:
        """Return the shared-group container directory, creating it if needed.

        Raises ``ConfigurationFailure`` when the group id is blank or the
        directory cannot be created.
        """
        group = self.app_group_id.strip()
        if not group:
            msg = "Shared group identifier is empty"
            raise ConfigurationFailure(msg)
        container = self.shared_container_root / group
        try:
            container.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            msg = f"Shared file container could not be created: {container}"
            raise ConfigurationFailure(msg) from exc
        return container

    def store_path(self) -> Path:
        """Path of the SQLite file both surfaces open."""
        path = self.shared_container() / f"{self.database_name}.sqlite"
        logger.debug("Shared store path: %s", path)
        return path


settings = Settings()
