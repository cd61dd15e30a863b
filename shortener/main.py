# shortener/main.py
from contextlib import asynccontextmanager
import logging

import uvicorn
from fastapi import FastAPI, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .database import SessionLocal, engine
from .storage import Storage, SQLStorage, StorageError, UrlNotFoundError
from . import models, schemas, utils

logger = logging.getLogger("url-shortener")

storage = SQLStorage(SessionLocal, engine)


def get_storage() -> Storage:
    return storage


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = app.dependency_overrides.get(get_storage, get_storage)()
    try:
        store.init()
    except StorageError:
        logger.exception("Unable to create database tables")
        raise
    yield


app = FastAPI(title="URL Shortener", lifespan=lifespan)


async def parse_create_body(request: Request) -> schemas.URLCreate:
    # body is decoded as JSON whatever the Content-Type header says
    body = await request.body()
    try:
        return schemas.URLCreate.model_validate_json(body)
    except ValidationError as e:
        logger.warning(f"Validation error at {request.url}: {e.errors()}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="invalid request")


# ---------- Core API ----------

@app.post(
    "/",
    response_model=schemas.URLInfo,
    responses={
        400: {"model": schemas.ErrorResponse},
        500: {"model": schemas.ErrorResponse},
    },
)
def create_short_url(
    payload: schemas.URLCreate = Depends(parse_create_body),
    store: Storage = Depends(get_storage),
):
    url_obj = models.Url(
        short_url=utils.generate_short_code(),
        redirect_url=payload.url,
    )
    try:
        store.create_short_url(url_obj)
    except StorageError:
        logger.exception(f"Failed to store short url {url_obj.short_url}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="unable to write to database",
        )

    logger.info(f"Created short url {url_obj.short_url} -> {url_obj.redirect_url}")
    return url_obj


@app.get(
    "/{short_code}",
    status_code=status.HTTP_303_SEE_OTHER,
    responses={
        404: {"model": schemas.ErrorResponse},
        500: {"model": schemas.ErrorResponse},
    },
)
def redirect_to_original(short_code: str, store: Storage = Depends(get_storage)):
    try:
        url_obj = store.get_url_from_short_url(short_code)
    except UrlNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="short url not found")
    except StorageError:
        logger.exception(f"Failed to look up short url {short_code}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="unable to read from database",
        )

    return RedirectResponse(url=url_obj.redirect_url, status_code=status.HTTP_303_SEE_OTHER)


# ---------- Centralized Error Handling ----------

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(f"HTTPException {exc.status_code} at {request.url}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def internal_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error at {request.url}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal server error"},
    )


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.info(f"Running on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
