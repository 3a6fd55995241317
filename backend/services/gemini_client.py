"""Google Gemini API wrapper with error handling."""

import logging

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)

_client: genai.Client | None = None


class ProviderError(RuntimeError):
    """Embedding or generation call to the provider failed."""


def get_client() -> genai.Client | None:
    global _client
    if not settings.gemini_api_key:
        logger.warning("No GEMINI_API_KEY set - Gemini features disabled")
        return None
    if _client is None:
        _client = genai.Client(api_key=settings.gemini_api_key)
    return _client


async def embed_text(
    client: genai.Client,
    text: str,
    model: str,
    dimension: int,
) -> list[float]:
    """Embed ``text`` with Gemini. Raises ProviderError on any failure."""
    try:
        response = await client.aio.models.embed_content(
            model=model,
            contents=text,
            config=types.EmbedContentConfig(output_dimensionality=dimension),
        )
    except Exception as e:
        raise ProviderError(f"Gemini embedding failed: {e}") from e

    if not response.embeddings or response.embeddings[0].values is None:
        raise ProviderError("Gemini returned no embedding")
    return list(response.embeddings[0].values)


async def generate_text(prompt: str) -> str | None:
    """Send a prompt to Gemini and return the plain-text response."""
    client = get_client()
    if client is None:
        return None

    try:
        response = await client.aio.models.generate_content(
            model="gemini-2.5-flash",
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=0.7,
                max_output_tokens=2048,
            ),
        )
        text = (response.text or "").strip()
        return text or None

    except Exception as e:
        logger.error("Gemini API error: %s", e)
        return None
