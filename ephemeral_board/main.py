import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse

from .config import settings
from .exceptions import ValidationError
from .routes import router, message_service

logger = logging.getLogger("uvicorn")

MISSING_FIELDS_ERROR = "Username and text are required"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager to handle startup and shutdown events.
    """
    await message_service.start_background_tasks()
    yield
    await message_service.stop_background_tasks()


app = FastAPI(title="Ephemeral message board", docs_url="/api-docs", lifespan=lifespan)
app.include_router(router, prefix="/api")


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"[API] Rejected message: {exc}")
    return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_ERROR})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"[API] Malformed request: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": MISSING_FIELDS_ERROR})


@app.get("/", include_in_schema=False)
async def root():
    return RedirectResponse(url="/api-docs")


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=settings.keep_alive_timeout,
    )
