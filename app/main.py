import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager
from app.api.routes import router
from app.core.config import settings
from app.core.container import build_services

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Build the shared services on startup; an unusable shared directory aborts startup.
    """
    # Startup
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Initializing Lunch Menu service...")
    app.state.services = build_services(settings)
    logger.info("Shared storage ready at %s", app.state.services.store.root)

    yield

    # Shutdown
    logger.info("Shutting down Lunch Menu service...")

app = FastAPI(
    title="Lunch Menu",
    description="Weekly lunch menus for FB38 and N58 with widget timelines",
    version="1.0.0",
    lifespan=lifespan
)

# Include API routes
app.include_router(router)

@app.get("/")
async def root():
    """Root endpoint with basic info"""
    return {
        "service": "Lunch Menu",
        "version": "1.0.0",
        "endpoints": {
            "menu": "GET /menu, GET /menu/{location}",
            "timeline": "GET /timeline/{location}?kind=week|today",
            "payment": "GET /payment/{location}",
            "preferences": "GET /preferences, PUT /preferences",
            "clear_cache": "DELETE /cache/clear",
            "health": "GET /health"
        }
    }
