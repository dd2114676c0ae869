import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import Settings, settings as default_settings
from app.db import Database
from app.errors import register_error_handlers
from app.logging_config import configure_logging
from app.notifications.slack import SlackChannel
from app.redis_client import make_redis
from app.routes.health import router as health_router
from app.routes.integrations import router as integrations_router
from app.routes.notifications import router as notifications_router
from app.routes.projects import router as projects_router
from app.routes.settings import router as settings_router
from app.routes.users import router as users_router

logger = logging.getLogger(__name__)

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        logger.info("shutting down, closing store and redis handles")
        app.state.db.dispose()
        app.state.redis.close()

    app = FastAPI(title="collab-access-api", version="0.1.0", lifespan=lifespan)

    # handles live for the whole process and are passed down via app.state
    app.state.settings = settings
    app.state.db = Database(settings.database_url)
    app.state.redis = make_redis(settings.redis_url)
    app.state.slack = SlackChannel(settings.slack_bot_token, timeout=settings.slack_timeout_seconds)

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(notifications_router)
    app.include_router(projects_router)
    app.include_router(users_router)
    app.include_router(integrations_router)
    app.include_router(settings_router)
    return app

app = create_app()
