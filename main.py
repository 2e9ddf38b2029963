import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.interfaces.api.routes import register_routes
from app.infrastructure.database import initialize_database, engine
from app.infrastructure.notifications import EventBus

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create missing tables on startup and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app(event_bus: EventBus | None = None) -> FastAPI:
    """Build the FastAPI application and its notification event bus.

    The bus lives on ``app.state`` and is shared by the request handlers that
    create or read notifications and by the push streams.
    """

    settings = get_settings()
    app = FastAPI(title="Forum notifications", lifespan=lifespan)
    app.state.event_bus = event_bus if event_bus is not None else EventBus()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app)
    return app


app = create_app()
