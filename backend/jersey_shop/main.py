"""FastAPI entrypoint for the jersey shop backend."""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .database import Base, engine
from .exception_handlers import configure_exception_handlers
from .logging_config import setup_logging
from .routers import couriers, customers, dashboard, orders, reports, settings as settings_router, transactions

settings = get_settings()
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(title=settings.app_name, version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    configure_exception_handlers(app)

    @app.get("/health", tags=["System"])
    def health_check():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    app.include_router(dashboard.router)
    app.include_router(customers.router)
    app.include_router(couriers.router)
    app.include_router(transactions.router)
    app.include_router(orders.router)
    app.include_router(reports.router)
    app.include_router(settings_router.router)

    logger.info("%s ready (environment=%s)", settings.app_name, settings.environment)
    return app


app = create_app()

# Create tables on import (fast path for a single-shop deployment; prefer Alembic for migrations)
Base.metadata.create_all(bind=engine)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
