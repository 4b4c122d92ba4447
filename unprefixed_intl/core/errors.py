"""Exception types.

Three tiers are kept apart:

* fatal at startup: the store or a generation run cannot start at all
  (``DefaultLanguageMissingError``, ``BundleLoadError``,
  ``SourceLanguageMissingError``, ``ConfigError``);
* recoverable per target: one generated bundle failed
  (``TargetGenerationError``), the others carry on;
* soft misses: lookups never raise, they return the ``path.subPath``
  placeholder instead.
"""

from __future__ import annotations

from pathlib import Path


class IntlError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(IntlError):
    """The configuration file exists but is unusable."""


class BundleLoadError(IntlError):
    """A bundle directory or one of its files could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"failed to load bundle {path}: {reason}")
        self.path = path
        self.reason = reason


class DefaultLanguageMissingError(IntlError):
    def __init__(self, default_lang: str, directory: Path) -> None:
        super().__init__(
            f"the default language was not found, default language:[{default_lang}], folder: {directory}"
        )
        self.default_lang = default_lang
        self.directory = directory


class SourceLanguageMissingError(IntlError):
    def __init__(self, source_lang: str) -> None:
        super().__init__(f"source language [{source_lang}] has no bundle")
        self.source_lang = source_lang


class TargetGenerationError(IntlError):
    """Translating or writing one target bundle failed.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, language_code: str, file_name: str, reason: str) -> None:
        super().__init__(f"generating [{language_code}] into {file_name}.json failed: {reason}")
        self.language_code = language_code
        self.file_name = file_name


class TranslationProviderError(IntlError):
    """An AI translation backend is misconfigured or returned nothing usable."""
