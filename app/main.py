"""
app/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Builds the record store, notification sender, enrollment registry and
  booking engine once, and keeps them on app.state
- Registers API routes (events, guest list, reservations, functions, admin)
- Manages application lifecycle (startup/shutdown)
"""

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional
import time

from app.core.config import Settings, settings, validate_settings
from app.core.errors import add_exception_handlers
from app.core.logging import setup_logging, get_logger
from app.db.mongo import connect_to_mongo, close_mongo_connection, check_database_health, get_database
from app.db.indexes import create_indexes
from app.db.store import RecordStore
from app.flow.dispatcher import EnrollmentRegistry
from app.services import event_service
from app.services.booking_service import BookingEngine
from app.services.notification_service import build_notification_sender
from app.services.reservation_notifier import ReservationNotifier
from app.services.twilio_service import TwilioService
from app.api import admin, events, functions, reservations
from app.api.deps import get_registry, get_store

# Initialize logging first
setup_logging()
logger = get_logger(__name__)

APP_VERSION = "1.0.0"


def init_services(app: FastAPI, store: RecordStore, config: Settings = settings) -> None:
    """
    Wires the engines around a record store and stores them on app.state.
    """
    twilio = TwilioService(base_url=config.TWILIO_API_BASE_URL)
    sender = build_notification_sender(config, store, twilio)

    app.state.store = store
    app.state.twilio = twilio
    app.state.sender = sender
    app.state.registry = EnrollmentRegistry(
        store,
        sender,
        cooldown_seconds=config.RESEND_COOLDOWN_SECONDS,
        ttl_minutes=config.ENROLLMENT_FLOW_TTL_MINUTES,
    )
    app.state.booking_engine = BookingEngine(store, ReservationNotifier(store, sender))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("🚀 Starting NightList application...")

    try:
        # Validate configuration
        logger.info("Validating configuration...")
        validate_settings()
        logger.info("✅ Configuration validated")

        # Connect to MongoDB
        logger.info("Connecting to MongoDB...")
        await connect_to_mongo()
        logger.info("✅ MongoDB connected")

        # Create database indexes
        logger.info("Creating database indexes...")
        await create_indexes()
        logger.info("✅ Database indexes created")

        # Health check
        is_healthy = await check_database_health()
        if not is_healthy:
            logger.warning("⚠️ Database health check failed during startup")
        else:
            logger.info("✅ Database health check passed")

        init_services(app, RecordStore(get_database()))
        transport = "remote functions" if settings.uses_remote_functions else "in-process functions"
        logger.info(f"✅ Services ready (notifications via {transport})")

        logger.info("🎉 NightList application started successfully!")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Debug Mode: {settings.DEBUG}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    # Shutdown
    logger.info("🛑 Shutting down NightList application...")

    try:
        # Close open guest list flows
        app.state.registry.close_all()
        logger.info("✅ Enrollment flows closed")

        # Close MongoDB connection
        await close_mongo_connection()
        logger.info("✅ MongoDB connection closed")

        logger.info("👋 NightList application shut down successfully")

    except Exception as e:
        logger.error(f"Error during shutdown: {str(e)}", exc_info=True)


# Create FastAPI app with lifespan
app = FastAPI(
    title="NightList - Nightlife Reservations",
    description="Guest list verification and table, bottle and special event bookings",
    version=APP_VERSION,
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,  # Disable docs in production
    redoc_url="/redoc" if settings.is_development else None,
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    # Log slow requests
    if process_time > 5.0:  # More than 5 seconds
        logger.warning(
            f"Slow request detected: {request.method} {request.url.path}",
            extra={"process_time": process_time}
        )

    return response


add_exception_handlers(app)

# Register API routes
app.include_router(events.router, prefix=settings.API_PREFIX, tags=["Events"])
app.include_router(reservations.router, prefix=settings.API_PREFIX, tags=["Reservations"])
app.include_router(admin.router, prefix=f"{settings.API_PREFIX}/admin", tags=["Admin"])
app.include_router(functions.router, prefix="/functions/v1", tags=["Functions"])


# Root endpoint
@app.get("/", tags=["Health"])
async def root(
    guestlist: Optional[str] = None,
    store: RecordStore = Depends(get_store),
    registry: EnrollmentRegistry = Depends(get_registry),
):
    """
    Root endpoint - basic info.

    ?guestlist=<event_id> is the shared guest list link: it opens an
    enrollment flow for that event. Unknown events leave guestlist null.
    """
    info = {
        "name": "NightList API",
        "version": APP_VERSION,
        "status": "running",
        "environment": settings.ENVIRONMENT,
    }
    if guestlist is None:
        return info

    event = await event_service.find_event(store, guestlist)
    if event is None or not event.is_published or not event.guest_list_available:
        logger.info(f"Guest list link for unknown event: {guestlist}")
        return {**info, "guestlist": None}

    return {**info, "guestlist": registry.open(event).snapshot().model_dump(mode="json")}


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """
    Comprehensive health check endpoint.
    Checks database connectivity and service status.
    """
    health_status = {
        "status": "healthy",
        "timestamp": time.time(),
        "environment": settings.ENVIRONMENT,
        "version": APP_VERSION,
        "checks": {}
    }

    # Check database
    db_healthy = await check_database_health()
    health_status["checks"]["database"] = "healthy" if db_healthy else "unhealthy"
    if not db_healthy:
        health_status["status"] = "unhealthy"

    health_status["checks"]["notifications"] = (
        "remote" if settings.uses_remote_functions else "in_process"
    )

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(content=health_status, status_code=status_code)


# Readiness probe (for Kubernetes/orchestration)
@app.get("/ready", tags=["Health"])
async def readiness_check():
    """
    Readiness probe - indicates if app is ready to receive traffic.
    """
    if await check_database_health():
        return {"status": "ready"}
    return JSONResponse(
        status_code=503,
        content={"status": "not_ready", "reason": "database_unavailable"}
    )


# Liveness probe (for Kubernetes/orchestration)
@app.get("/live", tags=["Health"])
async def liveness_check():
    """
    Liveness probe - indicates if app is alive.
    """
    return {"status": "alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )
