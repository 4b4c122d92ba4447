"""Generate new language bundles by translating every string of a source bundle."""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Tuple

from ...core.errors import SourceLanguageMissingError, TargetGenerationError
from ...core.store import Bundle, BundleStore, get_store

log = logging.getLogger(__name__)

# (text, target language code) -> translated text
TranslateOne = Callable[[str, str], Awaitable[str]]
# Returning False from either callback stops the whole run
OnSuccess = Callable[[str], Any]
OnError = Callable[[TargetGenerationError], Any]


class CancellationToken:
    """Stop flag shared by all targets of one run. It is never reset."""

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class TargetStatus(str, Enum):
    WRITTEN = "written"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass
class TargetOutcome:
    language_code: str
    file_name: str
    status: TargetStatus
    path: Optional[Path] = None
    error: Optional[TargetGenerationError] = None


@dataclass
class GenerationReport:
    outcomes: List[TargetOutcome] = field(default_factory=list)
    cancelled: bool = False

    def _codes(self, status: TargetStatus) -> List[str]:
        return [o.language_code for o in self.outcomes if o.status is status]

    @property
    def written(self) -> List[str]:
        return self._codes(TargetStatus.WRITTEN)

    @property
    def failed(self) -> List[str]:
        return self._codes(TargetStatus.FAILED)

    @property
    def stopped(self) -> List[str]:
        return self._codes(TargetStatus.CANCELLED)

    @property
    def ok(self) -> bool:
        return all(o.status is TargetStatus.WRITTEN for o in self.outcomes)


class _Stopped(Exception):
    pass


async def _notify(callback: Optional[Callable[[Any], Any]], arg: Any) -> bool:
    """Run a plain or async callback; False means stop."""
    if callback is None:
        return True
    result = callback(arg)
    if inspect.isawaitable(result):
        result = await result
    return result is not False


async def translate_bundle(
    source: Bundle,
    target_code: str,
    translate_one: TranslateOne,
    token: CancellationToken,
) -> Dict[str, Dict[str, str]]:
    """Translate ``source`` leaf by leaf, keeping its shape."""
    translated: Dict[str, Dict[str, str]] = {}
    for path, entries in source.items():
        out: Dict[str, str] = {}
        for sub_path, text in entries.items():
            if token.cancelled:
                raise _Stopped()
            result = await translate_one(text, target_code)
            if not isinstance(result, str):
                raise TypeError(f"translation of {path}.{sub_path} returned {type(result).__name__}, not str")
            out[sub_path] = result
        translated[path] = out
    return translated


def write_bundle(path: Path, bundle: Dict[str, Dict[str, str]]) -> None:
    """Write ``bundle`` as compact UTF-8 JSON, replacing any existing file."""
    with path.open("w", encoding="utf-8") as fh:
        json.dump(bundle, fh, ensure_ascii=False, separators=(",", ":"))


async def _run_target(
    source: Bundle,
    code: str,
    file_name: str,
    translate_one: TranslateOne,
    store: BundleStore,
    token: CancellationToken,
    on_success: Optional[OnSuccess],
    on_error: Optional[OnError],
) -> TargetOutcome:
    path = store.bundle_path(file_name)
    try:
        bundle = await translate_bundle(source, code, translate_one, token)
        await asyncio.to_thread(write_bundle, path, bundle)
    except _Stopped:
        log.info("Generation of [%s] stopped, %s not written", code, path.name)
        return TargetOutcome(code, file_name, TargetStatus.CANCELLED)
    except Exception as e:
        error = TargetGenerationError(code, file_name, str(e) or type(e).__name__)
        error.__cause__ = e
        log.error("Failed to generate [%s]: %s", code, e)
        if not await _notify(on_error, error):
            log.warning("Stopping generation after failure of [%s]", code)
            token.cancel()
        return TargetOutcome(code, file_name, TargetStatus.FAILED, path=path, error=error)

    log.info("Generated [%s] into %s", code, path)
    if not await _notify(on_success, code):
        log.info("Stopping generation after [%s] on request", code)
        token.cancel()
    return TargetOutcome(code, file_name, TargetStatus.WRITTEN, path=path)


def _warn_collisions(source_lang: str, targets: List[Tuple[str, str]]) -> None:
    counts = Counter(file_name for _, file_name in targets)
    for code, file_name in targets:
        if file_name == source_lang:
            log.warning("Target [%s] overwrites the source bundle %s.json", code, file_name)
        elif counts[file_name] > 1:
            log.warning("Target [%s] shares %s.json with another target; the last write wins", code, file_name)


async def generate(
    source_lang: str,
    targets: Iterable[Tuple[str, str]],
    translate_one: TranslateOne,
    on_success: Optional[OnSuccess] = None,
    on_error: Optional[OnError] = None,
    *,
    store: Optional[BundleStore] = None,
    token: Optional[CancellationToken] = None,
) -> GenerationReport:
    """Translate the ``source_lang`` bundle into each ``(code, file_name)`` target.

    All targets run concurrently and each one writes
    ``<messages dir>/<file_name>.json`` once all of its strings are
    translated. ``on_success(code)`` runs after a write, ``on_error(error)``
    when a target fails; either may return ``False`` to stop the remaining
    work, which is checked before every single string. A stopped target
    writes nothing.

    Raises ``SourceLanguageMissingError`` before any work when the source
    bundle does not exist. Exceptions raised by the callbacks are re-raised
    once every target has finished.
    """
    if store is None:
        store = get_store()
    source = store.get(source_lang)
    if source is None:
        raise SourceLanguageMissingError(source_lang)
    if token is None:
        token = CancellationToken()

    target_list = [(code, file_name) for code, file_name in targets]
    _warn_collisions(source_lang, target_list)
    log.info("Generating %d bundle(s) from [%s]", len(target_list), source_lang)

    tasks = [
        asyncio.create_task(
            _run_target(source, code, file_name, translate_one, store, token, on_success, on_error),
            name=f"generate-{code}",
        )
        for code, file_name in target_list
    ]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    outcomes: List[TargetOutcome] = []
    raised: List[BaseException] = []
    for (code, _), result in zip(target_list, results):
        if isinstance(result, BaseException):
            raised.append(result)
            log.error("Callback for [%s] raised %r", code, result)
        else:
            outcomes.append(result)
    if raised:
        written = [o.language_code for o in outcomes if o.status is TargetStatus.WRITTEN]
        log.error(
            "%d callback(s) raised, re-raising the first; written: %s",
            len(raised),
            ", ".join(written) or "none",
        )
        raise raised[0]
    return GenerationReport(outcomes=outcomes, cancelled=token.cancelled)
