from fastapi import Depends
from ..contracts.repositories import IHoldingRepository, IPortfolioRepository, IUserRepository
from ..contracts.sentiment import SentimentProvider
from ..services.portfolio_service import PortfolioService
from ..database import MemoryDatabase, get_db
from ..database.repositories import HoldingRepository, PortfolioRepository, UserRepository
from .common import get_sentiment_provider

def get_user_repository(db: MemoryDatabase = Depends(get_db)) -> IUserRepository:
    return UserRepository(db)

def get_portfolio_repository(db: MemoryDatabase = Depends(get_db)) -> IPortfolioRepository:
    return PortfolioRepository(db)

def get_holding_repository(db: MemoryDatabase = Depends(get_db)) -> IHoldingRepository:
    return HoldingRepository(db)

def get_portfolio_service(
    user_repo: IUserRepository = Depends(get_user_repository),
    portfolio_repo: IPortfolioRepository = Depends(get_portfolio_repository),
    holding_repo: IHoldingRepository = Depends(get_holding_repository),
    sentiment_provider: SentimentProvider = Depends(get_sentiment_provider),
) -> PortfolioService:
    return PortfolioService(
        user_repo=user_repo,
        portfolio_repo=portfolio_repo,
        holding_repo=holding_repo,
        sentiment_provider=sentiment_provider
    )
