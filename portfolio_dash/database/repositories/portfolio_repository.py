from typing import List, Optional
from ..database import MemoryDatabase
from ...entities.portfolio import Portfolio
from ...core.logger import logger


class PortfolioRepository:
    def __init__(self, db: MemoryDatabase):
        self.db = db

    def get_by_id(self, portfolio_id: int) -> Optional[Portfolio]:
        return self.db.tables["portfolios"].get(portfolio_id)

    def get_by_user_id(self, user_id: int) -> List[Portfolio]:
        return [
            portfolio
            for portfolio in self.db.tables["portfolios"].values()
            if portfolio.user_id == user_id
        ]

    def create(self, user_id: int, name: str) -> Portfolio:
        portfolio = Portfolio(id=self.db.next_id("portfolios"), user_id=user_id, name=name)
        self.db.put("portfolios", portfolio.id, portfolio)
        logger.info(f"Portfolio '{name}' created for user {user_id}")
        return portfolio

    def get_or_create_for_user(self, user_id: int, name: str) -> Portfolio:
        with self.db.lock:
            portfolios = self.get_by_user_id(user_id)
            if portfolios:
                return min(portfolios, key=lambda portfolio: portfolio.id)
            return self.create(user_id, name)
