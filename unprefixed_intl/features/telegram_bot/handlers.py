from __future__ import annotations

import logging
from typing import List, Optional

from telegram import Update
from telegram.ext import ContextTypes

from ...core.config import get_settings
from ...core.errors import IntlError
from ...core.resolver import Translations, translator
from ...core.store import BundleStore, reload

log = logging.getLogger(__name__)


def accepted_languages(update: Update) -> List[str]:
    """Telegram only reports one language per user, e.g. ``en`` or ``pt-br``."""
    user = update.effective_user
    lc = (user and user.language_code) or None
    return [lc] if lc else []


def translations_for(update: Update, path: str, store: Optional[BundleStore] = None) -> Translations:
    return translator(path, accepted_languages(update), store)


async def reload_locales(update: Update, _: ContextTypes.DEFAULT_TYPE) -> None:
    """Reload all bundles from disk (bot owners only)."""
    user = update.effective_user
    if not user or user.id not in get_settings().OWNER_IDS:
        return

    try:
        bundles = reload()
    except IntlError as e:
        log.error("Reload requested by %s failed: %s", user.id, e)
        await update.effective_message.reply_text(f"❌ Reload failed, previous bundles kept:\n{e}")
        return

    log.info("Bundles reloaded by %s", user.id)
    await update.effective_message.reply_text(
        f"✅ Reloaded {len(bundles)} language(s): {', '.join(sorted(bundles))}"
    )
