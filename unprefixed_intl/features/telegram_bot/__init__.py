from __future__ import annotations

from telegram.ext import Application, CommandHandler

from .handlers import accepted_languages, reload_locales, translations_for

__all__ = ["accepted_languages", "register", "reload_locales", "translations_for"]


def register(app: Application) -> None:
    app.add_handler(CommandHandler("reloadlang", reload_locales))
