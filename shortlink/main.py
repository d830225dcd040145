import argparse
import logging
import os
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shortlink.api import admin, shortener
from shortlink.core.config import Settings, load_settings
from shortlink.core.context import AppContext, StartupError, build_context
from shortlink.core.exceptions import ShortenerError
from shortlink.core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(context: AppContext) -> FastAPI:
    """Build the FastAPI app around an already initialized context.

    The context is closed when the app's lifespan ends.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Application '{context.settings.PROJECT_NAME}' starting up.")
        yield
        logger.info("Shutting down gracefully...")
        context.close()

    app = FastAPI(
        title=context.settings.PROJECT_NAME,
        description="URL Shortener Service",
        lifespan=lifespan,
    )
    app.state.context = context

    app.include_router(admin.router)
    app.include_router(shortener.router)

    @app.exception_handler(ShortenerError)
    async def shortener_exception_handler(request: Request, exc: ShortenerError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return app


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the URL shortener service")
    parser.add_argument("--config", default=".env", help="dotenv-style configuration file (default: .env)")
    return parser.parse_args(argv)


def serve(argv=None):
    args = parse_args(argv)
    settings: Settings = load_settings(args.config)
    configure_logging(settings.LOG_LEVEL)
    if not os.path.exists(args.config):
        logger.warning("Config file %s not found, using environment and defaults", args.config)

    try:
        context = build_context(settings)
    except StartupError as e:
        logger.error(str(e))
        sys.exit(1)

    config = uvicorn.Config(
        create_app(context),
        host=settings.LISTEN_HOST,
        port=settings.LISTEN_PORT,
        timeout_graceful_shutdown=settings.SHUTDOWN_TIMEOUT,
        log_config=None,
    )
    logger.info("Server listening on %s:%d...", settings.LISTEN_HOST, settings.LISTEN_PORT)
    # uvicorn traps SIGINT/SIGTERM, stops accepting and drains in-flight requests
    try:
        uvicorn.Server(config).run()
    except KeyboardInterrupt:
        pass
    logger.info("Server exiting")
    logging.shutdown()
    # Worker threads still blocked past the drain deadline are abandoned
    os._exit(0)


if __name__ == "__main__":
    serve()
