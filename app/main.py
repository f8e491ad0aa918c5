from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.api import api_router
from app.api.exception_handlers import register_exception_handlers
from app.core.config import Settings, settings as default_settings
from app.core.logger import logger
from app.db.session import Database
from app.middleware.log_middleware import LogMiddleware

@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database
    if app.state.settings.AUTO_CREATE_TABLES:
        await database.create_all()
    logger.info(f"{app.state.settings.PROJECT_NAME} started ({database.dialect_name})")
    yield
    await database.dispose()

def create_app(settings: Optional[Settings] = None, database: Optional[Database] = None) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(LogMiddleware)

    register_exception_handlers(app)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app

app = create_app()
