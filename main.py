"""Main entrypoint and application factory for the Spendify insights API.

This module initializes the FastAPI application, configures logging, creates the expense
tables on startup, and exposes the Scalar API reference endpoint for interactive OpenAPI
documentation. It also includes the main entrypoint for running the app with Uvicorn.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from scalar_fastapi import get_scalar_api_reference
from sqlalchemy.exc import SQLAlchemyError

from spendify.api.routes import router
from spendify.core.db import create_tables, get_engine
from spendify.core.settings import get_settings
from spendify.core.utils import LOG_FORMAT, PROJECT_LOGGER, ensure_dir, get_logger

logger = get_logger("spendify.main")


# --- Logging Setup ---
def setup_logging() -> None:
    """Configure the project logger level and add a plain-text file handler."""
    settings = get_settings()
    ensure_dir(settings.log_dir)
    project_logger = logging.getLogger(PROJECT_LOGGER)
    project_logger.setLevel(settings.log_level.upper())
    if not any(isinstance(h, logging.FileHandler) for h in project_logger.handlers):
        file_handler = logging.FileHandler(Path(settings.log_dir) / "insights.log")
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        project_logger.addHandler(file_handler)


setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan event handler that creates the expense tables when a database is configured."""
    _ = app  # Silence unused argument warning
    settings = get_settings()
    if not settings.database_url:
        logger.warning("DATABASE_URL is empty; insights endpoints will return 500")
    else:
        try:
            create_tables(get_engine(settings.database_url))
        except SQLAlchemyError:
            logger.exception("Failed to create expense tables")
            raise
    yield


app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Spendify Insights API",
    description="""
    The Spendify Insights API summarizes a user's expenses over a calendar-day window.

    **Endpoints:**
    - `POST /expense-insights`: Compute insights from a JSON body `{ownerId, startDate, endDate}`.
    - `GET /expense-insights`: Same, using query parameters.
    - `GET /health`: Health check endpoint.
    - `GET /scalar`: Interactive Scalar OpenAPI documentation.
    """,
    version="1.0.0",
)
app.include_router(router)


@app.get("/scalar", include_in_schema=False)
async def scalar_docs() -> HTMLResponse:
    """Return Scalar API reference."""
    return get_scalar_api_reference(openapi_url=app.openapi_url, title=app.title)


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run("main:app", host=settings.server_host, port=settings.server_port, reload=True)
