"""
Main FastAPI application entry point.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.config import get_settings
from app.api import router as api_router
from app.calculations.simulation import FieldError

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Compare home-loan offers across banks under SAC and PRICE",
    version="0.1.0",
    debug=settings.debug,
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report body type errors in the same {field, message, value} shape as range errors."""
    detail = []
    for error in exc.errors():
        loc = error.get("loc", ())
        field = str(loc[-1]) if len(loc) > 1 else "body"
        value = None if error.get("type") == "missing" else error.get("input")
        detail.append(FieldError(field, error.get("msg", ""), value).to_dict())

    logger.info(f"Rejected request body: {[item['field'] for item in detail]}")
    return JSONResponse(status_code=422, content=jsonable_encoder({"detail": detail}))


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": "0.1.0"}
