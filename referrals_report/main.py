from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from referrals_report.api.routes.health import router as health_router
from referrals_report.api.routes.referrals import get_report_assembler
from referrals_report.api.routes.referrals import router as referrals_router
from referrals_report.core.config import get_settings
from referrals_report.core.logging import configure_logging
from referrals_report.services.subgraph_client import get_subgraph_clients


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    yield
    for client in get_subgraph_clients().values():
        await client.aclose()
    get_report_assembler.cache_clear()
    get_subgraph_clients.cache_clear()


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.app_env != "dev")

    app = FastAPI(
        title="Referrals Report API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.include_router(health_router)
    app.include_router(referrals_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "referrals_report.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
