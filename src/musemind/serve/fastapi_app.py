"""FastAPI app for the MuseMind poem backend.

Endpoints:
- GET  /api/health
- POST /api/generate-poem  { "userInput": "...", "theme": "lovelines" }
- /api/*                   404 JSON
- everything else          static frontend with index.html fallback

There is no module-level app. Run it with `musemind-server`, or with
`uvicorn musemind.serve.fastapi_app:create_app --factory`.
"""
from __future__ import annotations
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from musemind.common.cleaning import clean_poem
from musemind.common.config import Settings
from musemind.common.schema import GenerateIn, GenerateOut, HealthOut
from musemind.common.templates import Theme, build_prompt
from musemind.serve.gemini_client import RemoteError, generate_text

LOGGER = logging.getLogger("musemind.app")

HEALTH_MESSAGE = "MuseMind backend is running with Gemini API!"
MISSING_INPUT_MESSAGE = "Please provide your feelings or thoughts to generate a poem."
CONFIG_ERROR_MESSAGE = "Server configuration error. Please contact support."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."
NOT_FOUND_MESSAGE = "Endpoint not found. Use POST /api/generate-poem."

GENERATE_PATH = "/api/generate-poem"


def error_response(status_code: int, message: str, retry_after: int | None = None) -> JSONResponse:
    """Build the `{error, retryAfter?}` body used by every failure path."""
    body: dict[str, object] = {"error": message}
    headers = None
    if retry_after is not None:
        body["retryAfter"] = retry_after
        headers = {"Retry-After": str(retry_after)}
    return JSONResponse(status_code=status_code, content=body, headers=headers)


class SPAStaticFiles(StaticFiles):
    """Static files that fall back to index.html so client-side routes resolve."""

    async def get_response(self, path: str, scope):  # noqa: ANN001
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response("index.html", scope)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Explicit configuration; read from the environment when omitted.
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        base = f"http://localhost:{settings.port}"
        LOGGER.info("MuseMind backend (Gemini model %s) starting", settings.gemini_model)
        LOGGER.info("Health check: %s/api/health", base)
        LOGGER.info("API endpoint: POST %s%s", base, GENERATE_PATH)
        if not settings.gemini_api_key:
            LOGGER.warning("GEMINI_API_KEY is not set; poem generation will fail until it is configured")
        yield

    app = FastAPI(title="MuseMind", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        LOGGER.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
        return error_response(400, MISSING_INPUT_MESSAGE)

    @app.get("/api/health", response_model=HealthOut)
    async def health() -> HealthOut:
        return HealthOut(message=HEALTH_MESSAGE)

    @app.post(GENERATE_PATH, response_model=GenerateOut)
    async def generate_poem(body: GenerateIn):
        user_input = body.user_input
        if not user_input or not user_input.strip():
            return error_response(400, MISSING_INPUT_MESSAGE)

        if not settings.gemini_api_key:
            LOGGER.error("GEMINI_API_KEY is not configured; cannot generate poem")
            return error_response(500, CONFIG_ERROR_MESSAGE)

        theme = Theme.resolve(body.theme)
        prompt = build_prompt(user_input, theme)
        try:
            raw = await generate_text(prompt, settings)
        except RemoteError as exc:
            LOGGER.error("Error generating poem (%s): %s", type(exc).__name__, exc)
            return error_response(exc.status_code, exc.public_message, exc.retry_after)
        except Exception:
            LOGGER.exception("Unexpected error generating poem")
            return error_response(500, UNEXPECTED_ERROR_MESSAGE)

        return GenerateOut(poem=clean_poem(raw), theme=theme.value)

    api_methods = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

    @app.api_route("/api", methods=api_methods, include_in_schema=False)
    @app.api_route("/api/{path:path}", methods=api_methods, include_in_schema=False)
    async def api_not_found() -> JSONResponse:
        return error_response(404, NOT_FOUND_MESSAGE)

    app.mount("/", SPAStaticFiles(directory=settings.static_dir, html=True), name="frontend")
    return app

