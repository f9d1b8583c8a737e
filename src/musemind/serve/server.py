"""Launch the MuseMind API with uvicorn."""
from __future__ import annotations
import argparse
import dataclasses
import logging

import uvicorn

from musemind.common.config import Settings
from musemind.common.logging_setup import setup_logging
from musemind.serve.fastapi_app import create_app

LOGGER = logging.getLogger("musemind.server")


def main() -> None:
    settings = Settings.from_env()

    ap = argparse.ArgumentParser(description="Run the MuseMind poem backend")
    ap.add_argument("--host", default=settings.host)
    ap.add_argument("--port", type=int, default=settings.port)
    ap.add_argument("--log-level", default=settings.log_level)
    args = ap.parse_args()

    settings = dataclasses.replace(settings, host=args.host, port=args.port, log_level=args.log_level)
    setup_logging(settings.log_level)
    LOGGER.info("Serving frontend from %s", settings.static_dir)

    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)

if __name__ == "__main__":
    main()
