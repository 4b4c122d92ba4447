from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from .store import BundleStore, PathEntries, get_store

log = logging.getLogger(__name__)

_EMPTY: PathEntries = MappingProxyType({})


def best_match(accepted_languages: Iterable[str], store: Optional[BundleStore] = None) -> str:
    """Return the first accepted language that has a bundle, else the default.

    ``accepted_languages`` is used in the order given, typically the
    ``Accept-Language`` preference order. With ``ALLOW_LANGUAGE_CODE`` a
    regional code such as ``en-US`` also matches a bare ``en`` bundle.
    Every candidate is examined. ``MAX_ACCEPTED_LANGUAGE_SEARCH`` is advisory:
    a match found past it is still returned and only logged.
    """
    if store is None:
        store = get_store()
    settings = store.settings
    limit = settings.MAX_ACCEPTED_LANGUAGE_SEARCH
    for i, candidate in enumerate(accepted_languages):
        match = None
        if candidate in store:
            match = candidate
        elif settings.ALLOW_LANGUAGE_CODE:
            parts = candidate.split("-", 1)
            if len(parts) > 1 and parts[0] in store:
                match = parts[0]
        if match is not None:
            if 0 < limit <= i:
                log.debug("Matched [%s] at position %d, past MAX_ACCEPTED_LANGUAGE_SEARCH=%d", match, i, limit)
            return match
    return store.default_lang


@dataclass(frozen=True)
class Translations:
    """Strings of one path in the language picked for a request."""

    language: str
    path: str
    entries: PathEntries = field(repr=False)

    def get(self, sub_path: str) -> str:
        text = self.entries.get(sub_path)
        if text is None:
            return f"{self.path}.{sub_path}"
        return text

    def __call__(self, sub_path: str) -> str:
        return self.get(sub_path)

    def __contains__(self, sub_path: object) -> bool:
        return sub_path in self.entries


def translator(path: str, accepted_languages: Iterable[str], store: Optional[BundleStore] = None) -> Translations:
    """Resolve the best language and bind the entries of ``path`` in it.

    Missing paths or sub paths never raise: ``get`` returns ``"path.subPath"``.
    """
    if store is None:
        store = get_store()
    language = best_match(accepted_languages, store)
    bundle: Mapping[str, PathEntries] = store.get(language) or _EMPTY
    return Translations(language=language, path=path, entries=bundle.get(path, _EMPTY))
