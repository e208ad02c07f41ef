"""
AI naming of extracted stickers.

Sends the sticker PNG to Gemini and asks for a short snake_case file name.
Every failure path resolves to FALLBACK_NAME.
"""

import json
import os
from typing import Optional

from google import genai
from google.genai import types

from ..logging import get_logger
from ..segmentation.extraction import decode_png_payload

logger = get_logger(__name__)

FALLBACK_NAME = "sticker"
DEFAULT_MODEL = "gemini-2.5-flash"

NAMING_PROMPT = (
    "Analyze this sticker. Return a JSON object with a 'filename' property "
    "containing a short, descriptive name (max 3 words) in English using "
    "snake_case. If there is text, try to capture the meaning or emotion. "
    "Example: 'sad_crying', 'thumbs_up', 'working_hard'."
)

_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={"filename": types.Schema(type=types.Type.STRING)},
)


class NamingError(Exception):
    """Raised when a naming response cannot be interpreted."""


def get_api_key() -> Optional[str]:
    for var in ("GEMINI_API_KEY", "API_KEY"):
        value = os.getenv(var)
        if value and value.strip():
            return value.strip()
    return None


def is_naming_available() -> bool:
    """Check whether an API key is configured for AI naming."""
    return get_api_key() is not None


def create_client() -> Optional[genai.Client]:
    """Build a Gemini client from the configured key, or None when there is no key."""
    api_key = get_api_key()
    if api_key is None:
        return None
    return genai.Client(api_key=api_key)


def parse_name_response(text: Optional[str]) -> str:
    """
    Pull the filename out of a JSON naming response.

    Raises:
        NamingError: If the text is not a JSON object
    """
    if not text:
        return FALLBACK_NAME
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise NamingError(f"Response is not valid JSON: {text[:80]!r}") from exc
    if not isinstance(data, dict):
        raise NamingError(f"Expected a JSON object, got {type(data).__name__}")

    name = data.get("filename")
    if not isinstance(name, str) or not name.strip():
        return FALLBACK_NAME
    return name.strip()


def generate_sticker_name(
    image_payload: str,
    model: str = DEFAULT_MODEL,
    client: Optional[genai.Client] = None,
) -> str:
    """
    Ask Gemini for a short name for one sticker.

    Args:
        image_payload: Base64 PNG, with or without a data URL prefix
        model: Gemini model identifier
        client: Pre-built client; one is created from the API key otherwise

    Returns:
        The suggested name, or FALLBACK_NAME on any failure
    """
    if client is None:
        client = create_client()
        if client is None:
            logger.warning("GEMINI_API_KEY is not set. Skipping AI naming.")
            return FALLBACK_NAME

    try:
        png_bytes = decode_png_payload(image_payload)
        response = client.models.generate_content(
            model=model,
            contents=[
                types.Part.from_bytes(data=png_bytes, mime_type="image/png"),
                NAMING_PROMPT,
            ],
            config=types.GenerateContentConfig(
                response_mime_type="application/json",
                response_schema=_RESPONSE_SCHEMA,
            ),
        )
        return parse_name_response(response.text)
    except Exception as exc:
        logger.error(f"Gemini naming error: {exc}")
        return FALLBACK_NAME
