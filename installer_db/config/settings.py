"""
Configuration settings for the Installer Version Collector

Values come from environment variables (case-sensitive) or a .env file.

Network:
- ENABLE_PROXY toggles whether fetches go through PROXY_URI (or DEFAULT_PROXY)
- REQUEST_TIMEOUT bounds every request

Storage:
- STORAGE_TYPE selects the upload collaborator (local, github, gitee)
"""

import logging
from enum import Enum
from pathlib import Path
from typing import List

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..sources.base.exceptions import ConfigException
from ..sources.base.http_fetcher import DEFAULT_TIMEOUT, FetchOptions

logger = logging.getLogger(__name__)

WORK_DIR_NAME = '.installer_db'


class StorageType(str, Enum):
    """Remote storage targets for published version files"""
    LOCAL = "local"
    GITHUB = "github"
    GITEE = "gitee"


def _default_work_dir() -> str:
    return str(Path.home() / WORK_DIR_NAME)


class CollectorSettings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Working directory for version files
    WORK_DIR: str = Field(default_factory=_default_work_dir)

    # Network
    ENABLE_PROXY: bool = False
    PROXY_URI: str = ""
    DEFAULT_PROXY: str = "http://127.0.0.1:2023"
    REQUEST_TIMEOUT: float = DEFAULT_TIMEOUT

    # Storage
    STORAGE_TYPE: StorageType = StorageType.LOCAL
    STORAGE_USERNAME: str = ""  # username for github or gitee
    STORAGE_TOKEN: str = ""
    STORAGE_REPO: str = ""
    STORAGE_BRANCH: str = "main"
    STORAGE_DIR: str = ""  # sub-path inside the repo
    LOCAL_STORAGE_DIR: str = ""

    # Sources skipped by the registry
    DISABLED_SOURCES: List[str] = []

    @field_validator('REQUEST_TIMEOUT')
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("REQUEST_TIMEOUT must be positive")
        return value

    @property
    def proxy(self) -> str:
        """Proxy in effect for this run, empty when the toggle is off"""
        if not self.ENABLE_PROXY:
            return ""
        return self.PROXY_URI or self.DEFAULT_PROXY

    def fetch_options(self) -> FetchOptions:
        return FetchOptions(proxy=self.proxy or None, timeout=self.REQUEST_TIMEOUT)

    def work_dir(self) -> Path:
        """Return the working directory, creating it when missing"""
        path = Path(self.WORK_DIR).expanduser()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def validate_storage(self) -> None:
        """
        Check that the selected storage type has what it needs

        Raises:
            ConfigException: If a required storage field is missing
        """
        if self.STORAGE_TYPE == StorageType.LOCAL:
            return
        for key in ('STORAGE_USERNAME', 'STORAGE_TOKEN', 'STORAGE_REPO'):
            if not getattr(self, key):
                raise ConfigException(
                    f"{key} is required for {self.STORAGE_TYPE.value} storage",
                    config_key=key
                )


def load_settings(**overrides) -> CollectorSettings:
    """
    Build settings from the environment, applying explicit overrides

    Raises:
        ConfigException: If a value cannot be parsed
    """
    try:
        settings = CollectorSettings(**overrides)
    except ValidationError as e:
        raise ConfigException(f"Invalid configuration: {e}")
    logger.debug(f"Settings loaded (work_dir={settings.WORK_DIR}, proxy={'on' if settings.ENABLE_PROXY else 'off'})")
    return settings
