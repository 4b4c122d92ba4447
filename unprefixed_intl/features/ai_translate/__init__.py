from __future__ import annotations

from .providers import gemini_translator, openai_translator, translator_for_model

__all__ = ["gemini_translator", "openai_translator", "translator_for_model"]
