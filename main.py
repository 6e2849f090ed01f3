"""
QR Event Check-in - FastAPI Backend
Main application entry point
"""

import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import uvicorn

from app.core.config import settings
from app.services.storage import get_store
from app.api import routes_admin, routes_guest, routes_public, ws
from app.utils.responses import register_exception_handlers

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    store = app.dependency_overrides.get(get_store, get_store)()
    logger.info(f"Storage backend ready: {type(store).__name__}")
    yield
    logger.info("Application shutdown")

def create_app() -> FastAPI:
    app = FastAPI(
        title="QR Event Check-in",
        description="Guest check-in, RSVP and event settings",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    os.makedirs("static", exist_ok=True)
    app.mount("/static", StaticFiles(directory="static"), name="static")

    app.include_router(routes_public.router, tags=["public"])
    app.include_router(routes_guest.router, prefix="/api", tags=["guest"])
    app.include_router(routes_admin.router, prefix="/api/admin", tags=["admin"])
    app.include_router(ws.router, prefix="/ws", tags=["websocket"])

    return app

app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
