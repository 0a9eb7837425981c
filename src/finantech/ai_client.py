# FinanTech - Multi-tenant financial management for SMBs
# Copyright (c) 2025 The FinanTech Authors
# Licensed under the MIT License. See LICENSE file for details.

"""
Minimal client for the hosted generative-language API (Gemini REST).

A single entry point, `generate_content`, sends a prompt and returns the text
of the first candidate. When a response schema is given, the model is asked
for a JSON answer matching it.

Requests are plain request/response: no retry and no streaming. Any failure
(missing key, transport error, HTTP error, unexpected payload) is raised as
`AIServiceError`; callers decide how to degrade.
"""

import logging
from typing import Any, Optional

import requests

from .config import AIConfig
from .errors import AIServiceError

logger = logging.getLogger(__name__)


def _extract_text(data: dict[str, Any]) -> str:
    if not isinstance(data, dict):
        raise AIServiceError("Unexpected AI response payload.")
    candidates = data.get("candidates") or []
    if not candidates:
        raise AIServiceError("Empty candidates in AI response.")
    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    text = "".join(str(p.get("text", "")) for p in parts)
    if not text.strip():
        raise AIServiceError("AI response did not contain any text.")
    return text


def generate_content(
    prompt: str,
    ai_config: AIConfig,
    *,
    temperature: float = 0.5,
    response_schema: Optional[dict[str, Any]] = None,
) -> str:
    """
    Send `prompt` to the configured model and return the generated text.

    Parameters
    ----------
    prompt:
        Natural-language task prompt.
    ai_config:
        API base URL, model, key environment variable and timeout.
    temperature:
        Sampling temperature.
    response_schema:
        Optional JSON schema; when provided, the response MIME type is set
        to application/json.

    Raises
    ------
    AIServiceError
        If no API key is configured or the call fails for any reason.
    """
    api_key = ai_config.api_key
    if not api_key:
        raise AIServiceError(
            f"API key not configured (environment variable {ai_config.api_key_env})."
        )

    generation_config: dict[str, Any] = {"temperature": temperature}
    if response_schema is not None:
        generation_config["responseMimeType"] = "application/json"
        generation_config["responseSchema"] = response_schema

    url = f"{ai_config.api_base}/models/{ai_config.model}:generateContent"
    logger.info("Calling %s (temperature=%.2f)", ai_config.model, temperature)

    try:
        response = requests.post(
            url,
            headers={
                "x-goog-api-key": api_key,
                "Content-Type": "application/json",
            },
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": generation_config,
            },
            timeout=ai_config.timeout,
        )
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as exc:
        logger.warning("AI request timed out after %ss", ai_config.timeout)
        raise AIServiceError("AI request timed out.") from exc
    except (requests.exceptions.RequestException, ValueError) as exc:
        logger.warning("AI call failed: %s", exc)
        raise AIServiceError(f"AI call failed: {exc}") from exc

    return _extract_text(data)
