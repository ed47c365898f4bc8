import os
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from fitcoach.api.routes import users as user_routes
from fitcoach.api.routes import plans as plan_routes
from fitcoach.api.routes import workouts as workout_routes
from fitcoach.api.routes import exercises as exercise_routes
from fitcoach.api.routes import system as system_routes
from fitcoach.api.errors import register_exception_handlers
from fitcoach.config import LOG_LEVEL, PORT, parse_origins
from fitcoach.db import init_db

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

# unauthenticated paths, kept out of the BearerAuth requirement in the docs
PUBLIC_PATHS = {"/", "/health", "/system/health", "/system/version", "/users/register", "/users/login", "/users/renew"}

def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

def custom_openapi(app: FastAPI):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description="API documentation for plans, workouts, and exercises.",
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
    }
    for path, item in openapi_schema["paths"].items():
        if path in PUBLIC_PATHS:
            continue
        for method in item.values():
            method.setdefault("security", [{"BearerAuth": []}])
    app.openapi_schema = openapi_schema
    return app.openapi_schema

def create_app() -> FastAPI:
    """
    Build the FastAPI app and register all routers
    """
    configure_logging()
    app_version = os.getenv("FITCOACH_VERSION", "0.1.0")
    cors_origins = parse_origins(os.getenv("FITCOACH_CORS_ORIGINS"))

    app = FastAPI(title="FitCoach API", version=app_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,   # env-configurable; defaults to ["*"]
        allow_methods=["*"],
        allow_headers=["*"],
        # browsers reject credentials with a wildcard origin
        allow_credentials=cors_origins != ["*"],
    )

    register_exception_handlers(app)

    @app.get("/")
    def root() -> dict:
        return {"message": "FitCoach API"}

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    # Route registration
    app.include_router(system_routes.router, prefix="/system", tags=["system"])
    app.include_router(user_routes.router, prefix="/users", tags=["users"])
    app.include_router(plan_routes.router, prefix="/plans", tags=["plans"])
    app.include_router(workout_routes.router, prefix="/workouts", tags=["workouts"])
    app.include_router(exercise_routes.router, prefix="/exercises", tags=["exercises"])

    app.openapi = lambda: custom_openapi(app)

    return app


def run() -> None:
    """
    Console entrypoint: create tables if needed and serve with uvicorn.
    """
    import uvicorn

    configure_logging()
    init_db()
    uvicorn.run("fitcoach.api.main:app", host="0.0.0.0", port=PORT, log_level=LOG_LEVEL.lower())


# entrypoint for uvicorn
app = create_app()
