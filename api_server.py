from __future__ import annotations  # FastAPI server exposing practice sessions and grading

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.routes import router
from config.settings import settings
from storage.migrate import migrate


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:  # Prepare storage and report missing grader credentials
    migrate(settings.DB_PATH)
    if not settings.OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set; grading requests will fail")
    yield


app = FastAPI(title="Practice Interview API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"]
)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:  # Flatten HTTP errors to {"error": ...}
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # Malformed request bodies
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=422,
        content={"error": f"{location}: {message}" if location else message},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:  # Last-resort 500
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or exc.__class__.__name__})


app.add_exception_handler(StarletteHTTPException, http_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)
app.include_router(router)


@app.get("/health")
def health() -> dict:  # Liveness probe
    return {"status": "ok"}


def main() -> None:  # Serve the API with uvicorn
    uvicorn.run("api_server:app", host="127.0.0.1", port=8000)


if __name__ == "__main__":
    main()
