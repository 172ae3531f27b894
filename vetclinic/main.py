import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import models  # noqa: F401  (registers tables with Base)
from .cache import Cache, get_cache, get_cache_stats
from .config import ALLOWED_ORIGINS, LOG_LEVEL
from .database import Base, engine
from .domain.booking.router import router as booking_router
from .domain.customers.router import router as customers_router
from .domain.doctors.router import router as doctors_router
from .exceptions import VetClinicError

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")
            raise

    stats = get_cache_stats()
    if stats.get("available"):
        logger.info(f"Cache ready ({stats['backend']})")
    else:
        logger.warning(f"Cache unavailable - lookups will hit the database: {stats.get('error')}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Vet Clinic API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(VetClinicError)
async def vetclinic_exception_handler(request: Request, exc: VetClinicError):
    """Render domain errors with their mapped status code"""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} - {type(exc).__name__}: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} - {type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed requests are client errors (400), not 422"""
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


# Log CORS configuration for debugging
logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(customers_router)
app.include_router(booking_router)
app.include_router(doctors_router)


@app.get("/")
def root():
    return {"message": "Vet Clinic API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}


@app.get("/health/cache")
def cache_health_check(cache: Cache = Depends(get_cache)):
    """Check cache backend status for monitoring"""
    stats = cache.stats()
    return {"status": "healthy" if stats.get("available") else "unhealthy", "cache": stats}
