from fastapi import FastAPI

from drivewise.entrypoints.http.exception_handlers import register_exception_handlers
from drivewise.entrypoints.http.routes.affordability import router as affordability_router
from drivewise.entrypoints.http.routes.financing import router as financing_router
from drivewise.entrypoints.http.routes.health import router as health_router


def build_app() -> FastAPI:
    app = FastAPI(
        title="DriveWise API",
        description="""
        Vehicle affordability and loan cost estimates.

        ## Features
        - Recommend a price range from income (10% rule)
        - Flag budget options that match the recommendation
        - Break down the cost of financing a chosen vehicle
        - Compare loan terms and lease options

        ## Estimates only
        Rates, insurance and fuel costs are fixed planning assumptions,
        not quotes. Nothing here guarantees loan approval.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        Missing income is not an error: affordability responses carry
        `available: false` instead.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        license_info={
            "name": "Proprietary",
        },
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(affordability_router, prefix="/v1")
    app.include_router(financing_router, prefix="/v1")

    return app


app = build_app()
