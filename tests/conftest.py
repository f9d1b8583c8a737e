from __future__ import annotations

from typing import Any, Callable

import httpx
import pytest

import musemind.serve.gemini_client as client_mod

Responder = Callable[[str, dict[str, Any]], httpx.Response]


def gemini_reply(text: str) -> dict[str, Any]:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


@pytest.fixture
def fake_gemini(monkeypatch: pytest.MonkeyPatch):
    """Install a fake httpx.AsyncClient answering with `responder`; returns the recorded calls."""
    calls: list[dict[str, Any]] = []

    def install(responder: Responder | BaseException) -> list[dict[str, Any]]:
        class _FakeAsyncClient:
            def __init__(self, timeout: float | None = None) -> None:
                self.timeout = timeout

            async def __aenter__(self) -> "_FakeAsyncClient":
                return self

            async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
                return None

            async def post(self, url: str, headers: dict[str, str] | None = None, json: dict[str, Any] | None = None) -> httpx.Response:  # noqa: A002
                calls.append({"url": url, "headers": headers, "json": json, "timeout": self.timeout})
                if isinstance(responder, BaseException):
                    raise responder
                resp = responder(url, json or {})
                resp.request = httpx.Request("POST", url)
                return resp

        monkeypatch.setattr(client_mod.httpx, "AsyncClient", _FakeAsyncClient)
        return calls

    return install


def respond(status: int, body: Any = None, text: str | None = None) -> Responder:
    def _responder(url: str, payload: dict[str, Any]) -> httpx.Response:
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=body)
    return _responder
