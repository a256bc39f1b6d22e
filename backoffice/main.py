"""
FastAPI Application
===================

Main FastAPI app setup with all routes and middleware.
Starts: index setup → Notification Dispatcher
"""
import logging
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

from backoffice.api.v1 import bank_account_router, kyc_router, support_ticket_router
from backoffice.core.config import get_settings
from backoffice.domain.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)


def create_application() -> FastAPI:
    """
    Create and configure FastAPI application.

    This function sets up the FastAPI application with:
    - Environment variable loading
    - Logging configuration
    - CORS middleware configuration
    - API route registration
    - Startup/shutdown event handlers for indexes and notification delivery

    Returns:
        Configured FastAPI application instance
    """
    # Load environment variables from .env file
    env_path = Path(__file__).resolve().parent.parent / ".env"
    load_dotenv(env_path)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    # Create FastAPI app
    application = FastAPI(
        title="Back-Office API",
        description="Bank accounts, KYC verification and support tickets",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add CORS middleware
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routers
    application.include_router(bank_account_router, prefix="/api/v1/bank-accounts")
    application.include_router(kyc_router, prefix="/api/v1/kyc")
    application.include_router(support_ticket_router, prefix="/api/v1/support-tickets")

    @application.on_event("startup")
    def startup_event():
        """
        Start all services when FastAPI starts.

        Startup sequence:
        1. Build the DI container (Mongo client, repositories, services)
        2. Ensure collection indexes (unique owner on KYC submissions)
        3. Start the notification dispatcher worker
        """
        from backoffice.di.container import get_container
        from backoffice.domain.repositories.bank_account_repository import BankAccountRepository
        from backoffice.domain.repositories.kyc_repository import KycRepository
        from backoffice.domain.repositories.support_ticket_repository import SupportTicketRepository
        from backoffice.application.services.notification_dispatcher import NotificationDispatcher

        container = get_container()

        try:
            for repository_type in (BankAccountRepository, KycRepository, SupportTicketRepository):
                container.get(repository_type).ensure_indexes()
            logger.info("Collection indexes ensured")
        except StoreUnavailable:
            # KYC inserts retry index creation before their first write
            logger.error("Could not ensure indexes; document store unavailable", exc_info=True)

        container.get(NotificationDispatcher).start()
        logger.info("All services started")

    @application.on_event("shutdown")
    def shutdown_event():
        """Stop all services when FastAPI shuts down."""
        from backoffice.di.container import get_container
        from backoffice.domain.repositories.notification_ports import Notifier
        from backoffice.application.services.notification_dispatcher import NotificationDispatcher

        container = get_container()
        container.get(NotificationDispatcher).stop()
        container.get(Notifier).close()
        container.get("mongo_client").close()
        logger.info("All services stopped")

    @application.get("/")
    def root():
        """Root endpoint - health check."""
        return {
            "status": "running",
            "service": "Back-Office API",
            "version": "1.0.0",
            "docs": "/docs"
        }

    @application.get("/health")
    def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return application


# Create application instance
app = create_application()
