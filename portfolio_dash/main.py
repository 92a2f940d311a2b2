from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from .config import settings
from .contracts.sentiment import SentimentProvider
from .core.logger import logger
from .database import MemoryDatabase, create_database
from .routes import holdings_router, market_router, portfolio_router
from .services.sentiment import WeightedRandomSentimentProvider

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application started successfully")
    yield
    logger.info("Application shutting down")

def create_app(
    db: Optional[MemoryDatabase] = None,
    sentiment_provider: Optional[SentimentProvider] = None,
) -> FastAPI:
    app = FastAPI(lifespan=lifespan, debug=settings.DEBUG)

    app.state.db = db if db is not None else create_database()
    app.state.sentiment_provider = sentiment_provider or WeightedRandomSentimentProvider()

    app.include_router(portfolio_router)
    app.include_router(holdings_router)
    app.include_router(market_router)
    return app

app = create_app()
