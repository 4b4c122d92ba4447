from __future__ import annotations

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Dict, List

from dotenv import load_dotenv
from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .errors import ConfigError

log = logging.getLogger(__name__)

ENV_FILE_NAME = ".env"
CONFIG_FILE_NAME = "unprefixed-intl.config.json"

load_dotenv(Path.cwd() / ENV_FILE_NAME)

# Keys of the JSON config file and the settings fields they fill
CONFIG_FILE_KEYS = {
    "messagesPath": "MESSAGES_PATH",
    "defaultLang": "DEFAULT_LANG",
    "maxAcceptedLanguageSearch": "MAX_ACCEPTED_LANGUAGE_SEARCH",
    "allowLanguageCode": "ALLOW_LANGUAGE_CODE",
}


class Settings(BaseSettings):
    # Folder holding the <code>.json bundles, relative to the working directory
    MESSAGES_PATH: str = "messages"
    DEFAULT_LANG: str = "en"
    # Advisory: matches past this position are logged, not skipped
    MAX_ACCEPTED_LANGUAGE_SEARCH: int = 3
    # en-US may fall back to en when there is no en-US bundle
    ALLOW_LANGUAGE_CODE: bool = True
    OWNER_IDS: Annotated[List[int], NoDecode] = []
    OPENAI_API_KEY: str = ""
    GEMINI_API_KEY: str = ""
    TRANSLATION_MODEL: str = "gpt-4o-mini"

    @field_validator("OWNER_IDS", mode="before")
    @classmethod
    def parse_owner_ids(cls, v):  # type: ignore
        if v in (None, "", []):
            return []
        if isinstance(v, int):
            return [v]
        if isinstance(v, list):
            return [int(x) for x in v]
        if isinstance(v, str):
            return [int(x.strip()) for x in v.split(",") if x.strip()]
        return []

    @field_validator("DEFAULT_LANG")
    @classmethod
    def check_default_lang(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("DEFAULT_LANG must not be empty")
        return v

    model_config = SettingsConfigDict(
        env_file=ENV_FILE_NAME,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def messages_dir(self, cwd: Path | str | None = None) -> Path:
        """Resolve ``MESSAGES_PATH`` against ``cwd`` (the working directory by default).

        Paths written as ``/src/messages`` in older config files are meant
        relative to the project, so an absolute path is only taken as-is
        when it exists.
        """
        path = Path(self.MESSAGES_PATH)
        if path.is_absolute() and path.exists():
            return path
        base = Path(cwd) if cwd is not None else Path.cwd()
        return base / self.MESSAGES_PATH.lstrip("/\\")


def _conventional_messages_path(base: Path) -> str:
    if (base / "src" / "messages").is_dir():
        return "src/messages"
    return "messages"


def read_config_file(path: Path) -> Dict[str, Any]:
    """Read ``unprefixed-intl.config.json`` into settings field names."""
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a JSON object")
    missing = [key for key in CONFIG_FILE_KEYS if data.get(key) is None]
    if missing:
        raise ConfigError(f"missing some property: {', '.join(missing)}")
    return {field: data[key] for key, field in CONFIG_FILE_KEYS.items()}


def load_config(cwd: Path | str | None = None) -> Settings:
    """Build settings from the config file in ``cwd``, or from conventions.

    An unusable config file is logged and ignored rather than raised.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    config_path = base / CONFIG_FILE_NAME
    if config_path.exists():
        try:
            return Settings(**read_config_file(config_path))
        except (ConfigError, ValidationError) as e:
            log.warning("Failed to read %s from %s, cause: %s", CONFIG_FILE_NAME, config_path, e)
    else:
        log.info("%s not found in %s, using defaults", CONFIG_FILE_NAME, base)
    messages_path = os.getenv("MESSAGES_PATH") or _conventional_messages_path(base)
    return Settings(MESSAGES_PATH=messages_path)


@lru_cache()
def get_settings() -> Settings:
    return load_config()
