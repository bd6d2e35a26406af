import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import models  # noqa: F401 - registers tables on Base.metadata
from .config import ALLOWED_ORIGINS, DATABASE_URL, ENVIRONMENT, RATE_LIMIT_ENABLED
from .database import Base, create_db_engine, create_session_factory
from .domain.admin.router import router as admin_router
from .domain.auth.router import router as auth_router
from .domain.catalog.router import router as catalog_router
from .domain.contacts.router import admin_router as admin_contacts_router
from .domain.contacts.router import router as contacts_router
from .domain.orders.router import bookings_router
from .domain.orders.router import router as orders_router
from .domain.sms.router import router as sms_router
from .domain.users.router import router as users_router
from .errors import register_exception_handlers

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
    logger.info(f"🚀 Laundry API starting up ({ENVIRONMENT})...")
    try:
        Base.metadata.create_all(bind=app.state.engine, checkfirst=True)
        logger.info("✅ Database tables ready")
    except Exception as e:
        # The store is required; refuse to serve without it
        logger.error(f"❌ Database initialization failed: {e}")
        raise

    yield

    logger.info("👋 Application shutting down...")
    app.state.engine.dispose()


def create_app(database_url: Optional[str] = None, rate_limit_enabled: Optional[bool] = None) -> FastAPI:
    """
    Build the application with its own engine and session factory.

    Nothing touches the database until the lifespan starts, so tests and
    scripts can build isolated apps against any URL.
    """
    app = FastAPI(title="Laundry API", version="1.0.0", lifespan=lifespan)

    app.state.engine = create_db_engine(database_url or DATABASE_URL)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.rate_limit_enabled = RATE_LIMIT_ENABLED if rate_limit_enabled is None else rate_limit_enabled

    register_exception_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
            raise
        duration_ms = (time.time() - start) * 1000
        logger.info(f"{request.method} {request.url.path} - {response.status_code} ({duration_ms:.0f}ms)")
        return response

    logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        # Browsers reject credentialed requests against a wildcard origin
        allow_credentials="*" not in ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(catalog_router)
    app.include_router(orders_router)
    app.include_router(bookings_router)
    app.include_router(contacts_router)
    app.include_router(admin_contacts_router)
    app.include_router(sms_router)
    app.include_router(admin_router)

    @app.get("/")
    def root():
        return {"success": True, "message": "Laundry API is running"}

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app

