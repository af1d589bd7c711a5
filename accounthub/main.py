"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from typing import Optional

from fastapi import FastAPI

from accounthub.api.errors import register_error_handlers
from accounthub.api.router import api_router
from accounthub.core.config import Settings, get_settings
from accounthub.core.logging import configure_logging
from accounthub.db.session import create_db_engine
from accounthub.services.billing import BillingProvider, StripeBillingClient


def create_app(settings: Optional[Settings] = None, billing: Optional[BillingProvider] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; loaded from the environment when omitted
        billing: Billing provider; a Stripe client built from settings when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Account provisioning with billing-identity linkage.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json")

    app.state.settings = settings
    app.state.engine = create_db_engine(settings)
    app.state.billing = billing or StripeBillingClient.from_settings(settings)

    register_error_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "service": "accounthub",
            "version": settings.VERSION
        }

    return app
