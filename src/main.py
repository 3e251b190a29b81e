from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.analytics import router as analytics_router
from src.api.export import router as export_router
from src.api.health import router as health_router
from src.api.reports import router as reports_router
from src.api.schools import router as schools_router
from src.config import get_settings
from src.db.base import DuplicateIdError
from src.services.reports import MalformedDateError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Ensure the data directory, SQLite database, and tables exist on startup."""
    settings = get_settings()
    db_path = Path(settings.SQLITE_PATH)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    from src.db.sqlite_repo import SQLiteSchoolRepository

    repo = SQLiteSchoolRepository(settings.SQLITE_PATH)
    await repo.init_db()
    await repo.engine.dispose()

    yield


app = FastAPI(
    title="ICT Observatory API",
    description="ICT readiness scoring, trends and fleet statistics for a network of schools",
    version="0.1.0",
    lifespan=lifespan,
)

_settings = get_settings()
_cors_origins = [o.strip() for o in _settings.CORS_ORIGINS.split(",") if o.strip()] if _settings.CORS_ORIGINS else []
if _cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(MalformedDateError)
async def malformed_date_handler(_request: Request, exc: MalformedDateError) -> JSONResponse:
    """Surface unparseable report dates as a client error instead of a 500."""
    logger.warning("Rejected request with malformed report date: %s", exc)
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "report_id": exc.report_id, "value": str(exc.value)},
    )


@app.exception_handler(DuplicateIdError)
async def duplicate_id_handler(_request: Request, exc: DuplicateIdError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc), "id": exc.record_id})


app.include_router(health_router)
app.include_router(schools_router)
app.include_router(reports_router)
app.include_router(analytics_router)
app.include_router(export_router)


if __name__ == "__main__":
    logging.basicConfig(level=_settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run("src.main:app", host="0.0.0.0", port=8000, reload=True)
