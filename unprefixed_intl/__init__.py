"""Runtime i18n helpers: JSON bundles, best language match and bundle generation.

Usage::

    from unprefixed_intl import translator

    t = translator("greet", ["es-MX", "en"])
    t("hello")   # "Hola", or "greet.hello" when the string is missing
"""

from __future__ import annotations

from .core.accept_language import parse_accept_language
from .core.config import Settings, get_settings, load_config
from .core.errors import (
    BundleLoadError,
    ConfigError,
    DefaultLanguageMissingError,
    IntlError,
    SourceLanguageMissingError,
    TargetGenerationError,
    TranslationProviderError,
)
from .core.resolver import Translations, best_match, translator
from .core.store import BundleStore, get_store, reload, set_store
from .features.generator import CancellationToken, GenerationReport, TargetStatus, generate

__version__ = "1.0.0"

__all__ = [
    "BundleLoadError",
    "BundleStore",
    "CancellationToken",
    "ConfigError",
    "DefaultLanguageMissingError",
    "GenerationReport",
    "IntlError",
    "Settings",
    "SourceLanguageMissingError",
    "TargetGenerationError",
    "TargetStatus",
    "TranslationProviderError",
    "Translations",
    "best_match",
    "generate",
    "get_settings",
    "get_store",
    "load_config",
    "parse_accept_language",
    "reload",
    "set_store",
    "translator",
]
