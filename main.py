"""
Social Accounts Service — application entry point.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from api.follows import router as follows_router
from api.middleware import register_exception_handlers, register_middleware
from api.users import router as users_router
from auth.routes import router as auth_router
from config.settings import Settings, config, get_settings
from database.session import init_db

logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s",
    stream=sys.stdout,
)
for _noisy in ("httpcore", "httpx", "multipart", "aiosqlite", "asyncio"):
    logging.getLogger(_noisy).setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or config

    app = FastAPI(
        title="Social Accounts Service",
        version="1.0.0",
        description="User registration, login and profiles.",
    )
    if settings is not config:
        app.dependency_overrides[get_settings] = lambda: settings

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_middleware(app)
    register_exception_handlers(app)

    # Routes
    app.include_router(auth_router, prefix="/api")
    app.include_router(users_router, prefix="/api")
    app.include_router(follows_router, prefix="/api")

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        f"/{settings.uploads_url_path.strip('/')}",
        StaticFiles(directory=str(upload_dir)),
        name="uploads",
    )

    @app.on_event("startup")
    async def on_startup():
        await init_db()
        logger.info("Serving uploads from %s", upload_dir.resolve())
        logger.info("Application ready to accept requests.")

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        log_level="debug" if config.debug else "info",
    )
