import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from company_dashboard.core import config
from company_dashboard.core.errors import DashboardError
from company_dashboard.routes import analytics, auth, records

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Company Records Dashboard API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DashboardError)
    async def dashboard_error(_: Request, exc: DashboardError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    @app.exception_handler(Exception)
    async def unexpected_error(_: Request, exc: Exception) -> JSONResponse:
        logger.exception("unhandled error", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    app.include_router(auth.router, prefix="/api")
    app.include_router(records.router, prefix="/api")
    app.include_router(analytics.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Company Records Dashboard API",
                "docs": "/docs",
                "health": "/api/session",
            }
        )

    return app


app = create_app()
