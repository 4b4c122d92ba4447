"""Shared fixtures for all tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from unprefixed_intl.core import config
from unprefixed_intl.core import store as store_module
from unprefixed_intl.core.config import Settings
from unprefixed_intl.core.store import BundleStore

ENV_KEYS = (
    "MESSAGES_PATH",
    "DEFAULT_LANG",
    "MAX_ACCEPTED_LANGUAGE_SEARCH",
    "ALLOW_LANGUAGE_CODE",
    "OWNER_IDS",
    "OPENAI_API_KEY",
    "GEMINI_API_KEY",
    "TRANSLATION_MODEL",
)

SCENARIO = {
    "en": {"greet": {"hello": "Hi"}},
    "es": {"greet": {"hello": "Hola"}},
}


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    config.get_settings.cache_clear()
    store_module.set_store(None)
    yield
    config.get_settings.cache_clear()
    store_module.set_store(None)


@pytest.fixture
def messages_dir(tmp_path) -> Path:
    path = tmp_path / "messages"
    path.mkdir()
    return path


@pytest.fixture
def write_bundles(messages_dir):
    def _write(bundles: dict) -> Path:
        for code, data in bundles.items():
            (messages_dir / f"{code}.json").write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return messages_dir

    return _write


@pytest.fixture
def make_store(messages_dir, write_bundles):
    """Write ``bundles`` to disk and return a loaded store over them."""

    def _make(bundles: dict, **overrides) -> BundleStore:
        write_bundles(bundles)
        store = BundleStore(Settings(MESSAGES_PATH=str(messages_dir), **overrides))
        store.load()
        return store

    return _make


@pytest.fixture
def scenario_store(make_store) -> BundleStore:
    return make_store(SCENARIO)
