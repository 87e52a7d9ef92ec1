"""Backend JSON API: categories, users, listings and login."""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from drivepark.core.config import Settings, get_settings
from drivepark.core.logging_setup import configure_logging
from drivepark.core.middleware import SecurityHeadersMiddleware
from drivepark.routers import auth as auth_router
from drivepark.routers import categories as categories_router
from drivepark.routers import listings_api as listings_api_router
from drivepark.routers import users as users_router
from drivepark.services.auth_service import AuthService
from drivepark.services.category_service import CategoryService
from drivepark.services.listing_service import ListingService
from drivepark.services.user_service import UserService

logger = logging.getLogger(__name__)


def create_backend_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="DrivePark API")

    allowed_cors = {settings.web_origin}
    if settings.app_env != "prod":
        allowed_cors.update({"http://localhost:3000", "http://127.0.0.1:3000"})
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    app.state.settings = settings
    app.state.category_service = CategoryService()
    app.state.user_service = UserService()
    app.state.listing_service = ListingService()
    app.state.auth_service = AuthService()

    app.include_router(auth_router.router)
    app.include_router(categories_router.router)
    app.include_router(users_router.router)
    app.include_router(listings_api_router.router)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info("backend app ready (env=%s)", settings.app_env)
    return app


app = create_backend_app()
