import json

import pytest

from unprefixed_intl.core.config import CONFIG_FILE_NAME, Settings, load_config, read_config_file
from unprefixed_intl.core.errors import ConfigError

FULL_CONFIG = {
    "messagesPath": "i18n",
    "defaultLang": "es",
    "maxAcceptedLanguageSearch": 5,
    "allowLanguageCode": False,
}


def write_config(directory, data):
    (directory / CONFIG_FILE_NAME).write_text(json.dumps(data), encoding="utf-8")


def test_config_file_is_used(tmp_path):
    write_config(tmp_path, FULL_CONFIG)
    settings = load_config(tmp_path)
    assert settings.MESSAGES_PATH == "i18n"
    assert settings.DEFAULT_LANG == "es"
    assert settings.MAX_ACCEPTED_LANGUAGE_SEARCH == 5
    assert settings.ALLOW_LANGUAGE_CODE is False
    assert settings.messages_dir(tmp_path) == tmp_path / "i18n"


def test_defaults_without_config_file(tmp_path):
    settings = load_config(tmp_path)
    assert settings.MESSAGES_PATH == "messages"
    assert settings.DEFAULT_LANG == "en"
    assert settings.MAX_ACCEPTED_LANGUAGE_SEARCH == 3
    assert settings.ALLOW_LANGUAGE_CODE is True


def test_src_messages_convention(tmp_path):
    (tmp_path / "src" / "messages").mkdir(parents=True)
    assert load_config(tmp_path).messages_dir(tmp_path) == tmp_path / "src" / "messages"


@pytest.mark.parametrize("missing", list(FULL_CONFIG))
def test_incomplete_config_file_falls_back(tmp_path, caplog, missing):
    data = dict(FULL_CONFIG)
    data[missing] = None
    write_config(tmp_path, data)

    settings = load_config(tmp_path)

    assert settings.DEFAULT_LANG == "en"
    assert settings.MESSAGES_PATH == "messages"
    assert "Failed to read" in caplog.text


def test_unreadable_config_file_falls_back(tmp_path):
    (tmp_path / CONFIG_FILE_NAME).write_text("{", encoding="utf-8")
    assert load_config(tmp_path).DEFAULT_LANG == "en"


def test_read_config_file_reports_missing_keys(tmp_path):
    write_config(tmp_path, {"messagesPath": "x"})
    with pytest.raises(ConfigError, match="defaultLang"):
        read_config_file(tmp_path / CONFIG_FILE_NAME)


def test_environment_applies_without_config_file(tmp_path, monkeypatch):
    monkeypatch.setenv("MESSAGES_PATH", "locales")
    monkeypatch.setenv("DEFAULT_LANG", "fr")
    monkeypatch.setenv("ALLOW_LANGUAGE_CODE", "false")
    settings = load_config(tmp_path)
    assert settings.MESSAGES_PATH == "locales"
    assert settings.DEFAULT_LANG == "fr"
    assert settings.ALLOW_LANGUAGE_CODE is False


def test_owner_ids_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("OWNER_IDS", "12, 34")
    assert Settings().OWNER_IDS == [12, 34]


def test_blank_default_lang_rejected():
    with pytest.raises(ValueError):
        Settings(DEFAULT_LANG="  ")


def test_leading_slash_is_relative_to_cwd(tmp_path):
    settings = Settings(MESSAGES_PATH="/src/messages-that-do-not-exist")
    assert settings.messages_dir(tmp_path) == tmp_path / "src" / "messages-that-do-not-exist"


def test_existing_absolute_path_kept(tmp_path):
    settings = Settings(MESSAGES_PATH=str(tmp_path))
    assert settings.messages_dir("/elsewhere") == tmp_path
