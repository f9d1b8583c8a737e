"""Async client for the Gemini generateContent endpoint.

Failures are raised as RemoteError subclasses; each carries the HTTP status,
the caller-facing message and an optional retry hint for the API layer.
"""
from __future__ import annotations
import logging
from typing import Any

import httpx

from musemind.common.config import Settings

LOGGER = logging.getLogger("musemind.gemini")

GENERATION_CONFIG: dict[str, Any] = {
    "temperature": 0.9,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 1024,
}


class RemoteError(RuntimeError):
    """Base class for failures talking to the generative-AI service."""
    status_code: int = 500
    public_message: str = "An unexpected error occurred."
    retry_after: int | None = None


class RemoteBadRequest(RemoteError):
    status_code = 400
    public_message = "Invalid request to AI service."


class RemoteAuthFailed(RemoteError):
    public_message = "Authentication with AI service failed."


class RemoteRateLimited(RemoteError):
    status_code = 429
    public_message = "Too many requests. Please wait a moment and try again."
    retry_after = 10


class RemoteUnavailable(RemoteError):
    status_code = 503
    public_message = "AI service is temporarily unavailable. Please try again later."
    retry_after = 20


class RemoteTimeout(RemoteError):
    status_code = 504
    public_message = "Request timed out. Please try again."


class RemoteMalformedResponse(RemoteError):
    pass


class RemoteUnknown(RemoteError):
    pass


class RemoteStatusUnknown(RemoteUnknown):
    public_message = "Failed to generate poem. Please try again."


_STATUS_ERRORS: dict[int, type[RemoteError]] = {
    400: RemoteBadRequest,
    401: RemoteAuthFailed,
    403: RemoteAuthFailed,
    429: RemoteRateLimited,
    503: RemoteUnavailable,
}


def classify_status(status: int) -> type[RemoteError]:
    """Pick the RemoteError subclass for an HTTP error status."""
    return _STATUS_ERRORS.get(status, RemoteStatusUnknown)


def build_payload(prompt: str) -> dict[str, Any]:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": dict(GENERATION_CONFIG),
    }


def extract_text(data: Any) -> str:
    """Return candidates[0].content.parts[0].text or raise RemoteMalformedResponse."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as exc:
        raise RemoteMalformedResponse("Unexpected response format from Gemini API") from exc
    if not isinstance(text, str):
        raise RemoteMalformedResponse("Gemini candidate text is not a string")
    return text


async def generate_text(prompt: str, settings: Settings) -> str:
    """
    Send one generateContent request and return the first candidate's text.

    Never retries.

    Args:
        prompt: Fully rendered prompt.
        settings: Provides the endpoint, credential and timeout.

    Raises:
        RemoteError: Classified failure of the outbound call.
    """
    headers = {
        "Content-Type": "application/json",
        "x-goog-api-key": settings.gemini_api_key or "",
    }
    try:
        async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
            resp = await client.post(settings.generate_url, headers=headers, json=build_payload(prompt))
            resp.raise_for_status()
    except httpx.TimeoutException as exc:
        LOGGER.error("Gemini request timed out after %ss: %s", settings.request_timeout, exc)
        raise RemoteTimeout(str(exc)) from exc
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code
        LOGGER.error("Gemini API error: status=%s body=%s", status, exc.response.text)
        raise classify_status(status)(f"Gemini returned HTTP {status}") from exc
    except httpx.HTTPError as exc:
        LOGGER.error("Gemini request failed: %s", exc)
        raise RemoteUnknown(str(exc)) from exc

    try:
        data = resp.json()
    except ValueError as exc:
        LOGGER.error("Gemini returned non-JSON body: %s", resp.text[:500])
        raise RemoteMalformedResponse("Gemini response is not JSON") from exc
    return extract_text(data)
