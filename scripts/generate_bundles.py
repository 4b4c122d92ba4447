#!/usr/bin/env python3
"""Translate a bundle into new languages with the configured AI model.

    python scripts/generate_bundles.py en es fr pt-BR:pt_br
"""
from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import List, Sequence, Tuple

from unprefixed_intl.core.config import get_settings
from unprefixed_intl.core.errors import IntlError, TargetGenerationError
from unprefixed_intl.core.logging_config import get_logger, setup_logging
from unprefixed_intl.core.store import BundleStore
from unprefixed_intl.features.ai_translate import translator_for_model
from unprefixed_intl.features.generator import generate

log = get_logger("unprefixed_intl.scripts.generate_bundles")


def parse_target(value: str) -> Tuple[str, str]:
    """``es`` -> (es, es); ``pt-BR:pt_br`` -> (pt-BR, pt_br)."""
    code, _, file_name = value.partition(":")
    if not code:
        raise argparse.ArgumentTypeError(f"invalid target {value!r}")
    return code, file_name or code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("source", help="language code of the bundle to translate")
    parser.add_argument("targets", nargs="+", type=parse_target, help="CODE or CODE:FILE_NAME")
    parser.add_argument("--model", default=None, help="overrides TRANSLATION_MODEL")
    parser.add_argument("--stop-on-error", action="store_true", help="stop every target after the first failure")
    return parser


async def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    store = BundleStore(settings)
    try:
        store.load()
        translate_one = translator_for_model(args.model, settings=settings)
    except IntlError as e:
        log.error("%s", e)
        return 2

    def on_success(code: str) -> bool:
        log.info("✅ %s done", code)
        return True

    def on_error(error: TargetGenerationError) -> bool:
        log.error("❌ %s", error)
        return not args.stop_on_error

    targets: List[Tuple[str, str]] = args.targets
    try:
        report = await generate(args.source, targets, translate_one, on_success, on_error, store=store)
    except IntlError as e:
        log.error("%s", e)
        return 2

    if report.stopped:
        log.warning("Stopped before writing: %s", ", ".join(report.stopped))
    return 0 if report.ok else 1


if __name__ == "__main__":
    debug_mode = os.getenv("DEBUG", "").lower() in ("1", "true", "yes")
    setup_logging(log_file=False, debug=debug_mode)
    sys.exit(asyncio.run(main()))
