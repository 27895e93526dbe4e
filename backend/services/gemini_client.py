"""Google Gemini API wrapper with error handling."""

import logging

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - match explanations disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


async def generate_text(prompt: str, system_instruction: str | None = None) -> str | None:
    """Send a prompt to Gemini and return the plain-text answer, or None on failure."""
    client = get_client()
    if client is None:
        return None

    try:
        response = await client.aio.models.generate_content(
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                temperature=0.7,
                max_output_tokens=300,
            ),
        )
        text = (response.text or "").strip()
        if not text:
            logger.warning("Gemini returned an empty explanation")
            return None
        return text

    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None
