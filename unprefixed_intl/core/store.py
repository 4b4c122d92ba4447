from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional

from .config import Settings, get_settings
from .errors import BundleLoadError, DefaultLanguageMissingError

log = logging.getLogger(__name__)

BUNDLE_SUFFIX = ".json"

# path -> sub path -> text
PathEntries = Mapping[str, str]
Bundle = Mapping[str, PathEntries]


def read_bundle(path: Path) -> Bundle:
    """Parse one ``{path: {subPath: text}}`` file into a read-only bundle."""
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as e:
        raise BundleLoadError(path, str(e)) from e
    if not isinstance(data, dict):
        raise BundleLoadError(path, "top level must be an object")

    bundle: Dict[str, PathEntries] = {}
    for key, entries in data.items():
        if not isinstance(entries, dict):
            raise BundleLoadError(path, f"[{key}] must be an object")
        for sub_key, text in entries.items():
            if not isinstance(text, str):
                raise BundleLoadError(path, f"[{key}.{sub_key}] must be a string")
        bundle[key] = MappingProxyType(dict(entries))
    return MappingProxyType(bundle)


def read_bundles(directory: Path) -> Dict[str, Bundle]:
    """Read every ``<code>.json`` file in ``directory``; the first bad file aborts."""
    try:
        files = sorted(p for p in directory.iterdir() if p.suffix == BUNDLE_SUFFIX and p.is_file())
    except OSError as e:
        raise BundleLoadError(directory, str(e)) from e
    bundles: Dict[str, Bundle] = {}
    for file in files:
        bundles[file.stem] = read_bundle(file)
        log.debug("Loaded bundle %s (%d paths)", file.name, len(bundles[file.stem]))
    return bundles


class BundleStore:
    """All bundles of one messages folder, swapped in whole on every load."""

    def __init__(self, settings: Settings, cwd: Path | str | None = None) -> None:
        self.settings = settings
        self.directory = settings.messages_dir(cwd)
        self._bundles: Mapping[str, Bundle] = MappingProxyType({})

    @property
    def default_lang(self) -> str:
        return self.settings.DEFAULT_LANG

    @property
    def bundles(self) -> Mapping[str, Bundle]:
        return self._bundles

    @property
    def languages(self) -> List[str]:
        return sorted(self._bundles)

    def load(self) -> Mapping[str, Bundle]:
        bundles = read_bundles(self.directory)
        if self.default_lang not in bundles:
            raise DefaultLanguageMissingError(self.default_lang, self.directory)
        # Published with a single assignment; readers see the old or the new store
        self._bundles = MappingProxyType(bundles)
        log.info("Loaded %d bundle(s) from %s: %s", len(bundles), self.directory, ", ".join(sorted(bundles)))
        return self._bundles

    def reload(self) -> Mapping[str, Bundle]:
        return self.load()

    def get(self, code: str) -> Optional[Bundle]:
        return self._bundles.get(code)

    def bundle_path(self, file_name: str) -> Path:
        return self.directory / f"{file_name}{BUNDLE_SUFFIX}"

    def __contains__(self, code: object) -> bool:
        return code in self._bundles

    def __iter__(self) -> Iterator[str]:
        return iter(self._bundles)

    def __len__(self) -> int:
        return len(self._bundles)


_store: Optional[BundleStore] = None


def get_store() -> BundleStore:
    """Return the process-wide store, loading it from the configuration on first use."""
    global _store
    if _store is None:
        store = BundleStore(get_settings())
        store.load()
        _store = store
    return _store


def set_store(store: Optional[BundleStore]) -> None:
    global _store
    _store = store


def reload() -> Mapping[str, Bundle]:
    if _store is None:
        return get_store().bundles
    return _store.reload()
