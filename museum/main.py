# museum/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from museum.api import api_router
from museum.data.database import Base, engine
from museum.utils.logging import get_logger

# rejestracja wszystkich modeli w Base.metadata przed create_all
import museum.data.models  # noqa: F401

logger = get_logger(__name__)


def init_db() -> None:
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables ready")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield
    engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Vyom Heritage Museum API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(api_router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
