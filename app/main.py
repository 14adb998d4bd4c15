import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from .config import ALLOWED_ORIGINS, SECURITY_HEADERS_ENABLED
from .database import Base, SessionLocal, engine
from .domain.auth import router as auth_router
from .domain.clients import router as clients_router
from .domain.inventory import categories_router as product_categories_router
from .domain.inventory import router as products_router
from .domain.inventory import suppliers_router
from .domain.pets import router as pets_router
from .domain.sales import items_router as sale_items_router
from .domain.sales import router as sales_router
from .domain.scheduling import router as appointments_router
from .domain.services import categories_router as service_categories_router
from .domain.services import router as services_router
from .domain.staff import router as staff_router
from .domain.tasks import router as tasks_router
from .domain.users import router as users_router
from .exceptions import register_exception_handlers
from .security_headers import SecurityHeadersMiddleware

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


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

    try:
        from .rate_limiter import get_redis_client

        get_redis_client()  # Connection test
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(
            f"Redis connection failed - login and password recovery will answer 503: {e}"
        )

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Petshop ERP API", version="1.0.0", lifespan=lifespan)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


if SECURITY_HEADERS_ENABLED:
    app.add_middleware(
        SecurityHeadersMiddleware, exclude_paths=["/health", "/docs", "/openapi.json"]
    )
    logger.info("Security headers enabled")
else:
    logger.warning("Security headers DISABLED - only use in development!")

logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(clients_router)
app.include_router(staff_router)
app.include_router(pets_router)
app.include_router(service_categories_router)
app.include_router(services_router)
app.include_router(product_categories_router)
app.include_router(suppliers_router)
app.include_router(products_router)
app.include_router(appointments_router)
app.include_router(sales_router)
app.include_router(sale_items_router)
app.include_router(tasks_router)


@app.get("/")
def root():
    return {"message": "Petshop ERP API is running"}


@app.get("/health")
def health():
    """Liveness plus a database round trip"""
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        database = "connected"
    except Exception as e:
        logger.error(f"❌ Health check database error: {e}")
        database = "unavailable"
    finally:
        db.close()
    return {"status": "healthy" if database == "connected" else "degraded", "database": database}
