import logging
import os
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from newsdesk.config import ConfigError
from newsdesk.logging_config import configure_logging
from newsdesk.routers.main import api_router


def setup_logging() -> None:
    # Leave logging alone when the caller already set it up, e.g. the CLI with --log-level
    if not logging.getLogger().handlers:
        configure_logging()


load_dotenv(override=False)
setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title='Newsdesk API',
    description='News browsing and AI transcription endpoints for reporters.')

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Keep headers such as "Allow" on 405 responses
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=400,
        content={"error": "Malformed request body."},
    )

@app.exception_handler(ConfigError)
async def config_exception_handler(request: Request, exc: ConfigError):
    logger.error("Invalid server configuration: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Server configuration error.", "details": str(exc)},
    )

app.include_router(api_router)


def run():
    uvicorn.run(app, host=os.environ.get('HOST', '0.0.0.0'), port=int(os.environ.get('PORT', 8080)))


if __name__ == "__main__":
    run()
