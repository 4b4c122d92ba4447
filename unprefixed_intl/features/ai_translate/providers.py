"""AI-backed ``translate_one`` callbacks for the bundle generator."""

import asyncio
import logging
from typing import Any, Dict, Optional

import google.generativeai as genai
from openai import AsyncOpenAI

from ...core.config import Settings, get_settings
from ...core.errors import TranslationProviderError
from ..generator import TranslateOne

log = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

SYSTEM_PROMPT = (
    "You translate user interface strings for a software product.\n"
    "• Translate the user's message into the language with the code given below\n"
    "• Reply with the translation only, no quotes, notes or explanations\n"
    "• Keep placeholders such as {name}, %s, $user and HTML tags unchanged\n"
    "• Keep the original punctuation, capitalisation style and line breaks"
)

_gemini_configured = False


def _system_prompt(target_lang: str) -> str:
    return f"{SYSTEM_PROMPT}\n\nTarget language code: {target_lang}"


def _clean(text: Optional[str], target_lang: str) -> str:
    content = (text or "").strip()
    if not content:
        raise TranslationProviderError(f"empty translation returned for [{target_lang}]")
    return content


def openai_translator(
    model: Optional[str] = None,
    client: Optional[AsyncOpenAI] = None,
    settings: Optional[Settings] = None,
) -> TranslateOne:
    """Build a ``translate_one`` callback using the OpenAI chat completions API."""
    settings = settings or get_settings()
    model_name = model or settings.TRANSLATION_MODEL or DEFAULT_OPENAI_MODEL
    if client is None:
        if not settings.OPENAI_API_KEY:
            raise TranslationProviderError("OPENAI_API_KEY not set in environment variables")
        client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)

    async def translate_one(text: str, target_lang: str) -> str:
        completion_params: Dict[str, Any] = {
            "model": model_name,
            "messages": [
                {"role": "system", "content": _system_prompt(target_lang)},
                {"role": "user", "content": text},
            ],
        }
        if "gpt-5" not in model_name:
            completion_params["temperature"] = 0.2
        response = await client.chat.completions.create(**completion_params)
        return _clean(response.choices[0].message.content, target_lang)

    return translate_one


def _extract_gemini_text(response: Any) -> str:
    # response.text raises when the candidate was blocked or has no text part
    try:
        text = response.text
    except (ValueError, AttributeError):
        text = None
    if text:
        return text
    parts = []
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            value = getattr(part, "text", None)
            if value:
                parts.append(value)
    return "".join(parts)


def gemini_translator(
    model: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> TranslateOne:
    """Build a ``translate_one`` callback using a Gemini model."""
    global _gemini_configured
    settings = settings or get_settings()
    model_name = model or DEFAULT_GEMINI_MODEL
    if not settings.GEMINI_API_KEY:
        raise TranslationProviderError("GEMINI_API_KEY not set in environment variables")
    if not _gemini_configured:
        genai.configure(api_key=settings.GEMINI_API_KEY)
        _gemini_configured = True

    models: Dict[str, genai.GenerativeModel] = {}

    def _model_for(target_lang: str) -> genai.GenerativeModel:
        if target_lang not in models:
            models[target_lang] = genai.GenerativeModel(model_name, system_instruction=_system_prompt(target_lang))
        return models[target_lang]

    async def translate_one(text: str, target_lang: str) -> str:
        response = await asyncio.to_thread(
            _model_for(target_lang).generate_content,
            text,
            generation_config={"temperature": 0.2},
        )
        return _clean(_extract_gemini_text(response), target_lang)

    return translate_one


def translator_for_model(model: Optional[str] = None, settings: Optional[Settings] = None) -> TranslateOne:
    """Pick the provider from the model name: ``gemini*`` models use Gemini, the rest OpenAI."""
    settings = settings or get_settings()
    model_name = model or settings.TRANSLATION_MODEL
    log.info("Using translation model %s", model_name)
    if model_name.startswith("gemini"):
        return gemini_translator(model_name, settings=settings)
    return openai_translator(model_name, settings=settings)
