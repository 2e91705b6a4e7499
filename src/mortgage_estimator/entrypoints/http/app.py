from fastapi import FastAPI

from mortgage_estimator.entrypoints.http.exception_handlers import register_exception_handlers
from mortgage_estimator.entrypoints.http.routes.health import router as health_router
from mortgage_estimator.entrypoints.http.routes.mortgage import router as mortgage_router
from mortgage_estimator.infra.logging import setup_logging


def build_app() -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="Mortgage Estimator API",
        description="""
        Monthly mortgage payment estimates with amortization schedules.

        ## Features
        - Payment breakdown: principal & interest, taxes, insurance
        - Full amortization schedule with loan totals
        - Last-used inputs for pre-filling the calculator

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(mortgage_router, prefix="/v1")

    return app


app = build_app()
