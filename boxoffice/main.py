import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError

from boxoffice.db.init_db import create_database
from boxoffice.db.base import Base
from boxoffice.db.session import engine
from boxoffice.core.config import settings
from boxoffice.api.v1.router import api_router
from boxoffice.utils.booking import BookingError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: the schema normally belongs to the store; create it only when asked
    if settings.AUTO_CREATE_SCHEMA:
        create_database()
        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Store error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": f"Database error: {exc}"})


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    return JSONResponse(status_code=400, content={"detail": f"Reservation failed: {exc}"})


# Uploaded posters are served from the static directory
app.mount(
    settings.POSTER_URL_PREFIX.rstrip("/"),
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="posters",
)

app.include_router(api_router, prefix=settings.API_PREFIX)
