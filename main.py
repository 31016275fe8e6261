#!/usr/bin/env python3
"""
Numbers4 Engine HTTP server

Serves the prediction, backtest and analysis endpoints of numbers4.api under
/api/v1/engine. HOST, PORT and LOG_LEVEL come from the environment or a .env
file in the working directory.
"""
import os

from dotenv import load_dotenv

load_dotenv()

from numbers4.api import app  # noqa: E402

UVICORN_LOG_LEVELS = {"critical", "error", "warning", "info", "debug", "trace"}


def _server_settings():
    try:
        port = int(os.getenv("PORT", "8000"))
    except ValueError:
        port = 8000

    log_level = os.getenv("LOG_LEVEL", "info").lower()
    if log_level not in UVICORN_LOG_LEVELS:
        log_level = "info"

    return os.getenv("HOST", "0.0.0.0"), port, log_level


if __name__ == "__main__":
    import uvicorn

    host, port, log_level = _server_settings()
    uvicorn.run(app, host=host, port=port, log_level=log_level)
