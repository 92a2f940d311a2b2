from .database import MemoryDatabase, create_database, get_db
from .repositories import UserRepository, PortfolioRepository, HoldingRepository

__all__ = [
    "MemoryDatabase",
    "create_database",
    "get_db",
    "UserRepository",
    "PortfolioRepository",
    "HoldingRepository",
]
