"""
Receipt Processor — FastAPI application entry‑point.
"""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from receipt_processor.config import settings
from receipt_processor.database import ReceiptStore
from receipt_processor.errors import (
    CorruptRecordError,
    ReceiptError,
    ReceiptNotFoundError,
    ReceiptValidationError,
)

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s  %(name)-30s  %(levelname)-5s  %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: one store for the lifetime of the process
    app.state.store = ReceiptStore()
    logger.info("Receipt store ready (environment: %s)", settings.ENVIRONMENT)
    yield
    logger.info("Shutting down with %d receipts in memory", len(app.state.store))


app = FastAPI(
    title=settings.APP_NAME,
    description="Receipt document → validation → points → in-memory ledger",
    version=settings.VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s -> %d (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


# ── Exception handlers ───────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected request body: %s", exc.errors()[:1])
    return JSONResponse(status_code=400, content={"detail": ReceiptValidationError.detail})


@app.exception_handler(ReceiptValidationError)
async def receipt_validation_handler(request: Request, exc: ReceiptValidationError):
    return JSONResponse(status_code=400, content={"detail": exc.detail})


@app.exception_handler(ReceiptNotFoundError)
async def not_found_handler(request: Request, exc: ReceiptNotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.detail})


@app.exception_handler(CorruptRecordError)
async def corrupt_record_handler(request: Request, exc: CorruptRecordError):
    logger.error("Corrupt record served to %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": ReceiptError.detail})


@app.get("/")
async def root():
    return {"service": settings.APP_NAME, "version": settings.VERSION, "status": "running"}


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


# ── Register API router ──────────────────────────────────────────────────
from receipt_processor.routers.receipts import router as receipts_router  # noqa: E402

app.include_router(receipts_router, tags=["Receipts"])
