from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine

from .api import auth, health, tasks, users
from .api.errors import register_exception_handlers
from .config import Settings, configure_logging
from .database import create_db_and_tables, make_engine
from .services.auth import make_password_context


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Configuration; read from the environment when omitted
        engine: Database engine; built from ``settings.database_url`` when omitted
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        create_db_and_tables(app.state.engine)
        yield

    app = FastAPI(title="Task Manager API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine or make_engine(settings.database_url, echo=settings.sql_echo)
    app.state.password_context = make_password_context(settings.bcrypt_rounds)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        max_age=3600,
    )

    register_exception_handlers(app)

    # Mount routers
    app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(health.router, tags=["health"])

    @app.get("/")
    async def read_root():
        return {"message": "Welcome to the Task Manager API!"}

    return app


app = create_app()
