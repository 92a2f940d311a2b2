"""Shared fixtures: an isolated in-memory database per test, repositories,
the portfolio service with a deterministic sentiment stub, and an HTTP client.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from portfolio_dash.database import (
    HoldingRepository,
    MemoryDatabase,
    PortfolioRepository,
    UserRepository,
)
from portfolio_dash.entities import InstrumentType, MarketSentiment
from portfolio_dash.main import create_app
from portfolio_dash.services import FixedSentimentProvider, PortfolioService

HEADER = '"Instrument","Qty.","Avg. cost","LTP","Invested","Cur. val","P&L","Net chg.","Day chg."'

SAMPLE_CSV = "\n".join([
    HEADER,
    '"RELIANCE","10","2400.50","2500","24005","25000","995","4.14","50"',
    '"NIFTYBEES","100","200","210","20000","21000","1000","5","-100"',
    '"109ESPL26","5","1000","1010","5000","5050","50","1","0"',
]) + "\n"


def csv_text(*rows: str) -> str:
    return "\n".join([HEADER, *rows]) + "\n"


def holding_data(portfolio_id: int = 1, instrument: str = "RELIANCE", **overrides) -> dict:
    data = {
        "portfolio_id": portfolio_id,
        "instrument": instrument,
        "instrument_type": InstrumentType.STOCK,
        "quantity": "10",
        "avg_cost": "100",
        "ltp": "110",
        "invested": "1000",
        "current_value": "1100",
        "pnl": "100",
        "pnl_percent": "10",
        "day_change": "10",
        "day_change_percent": "0.9174",
        "company_name": instrument,
        "sector": "Technology",
        "market_sentiment": MarketSentiment.NEUTRAL,
    }
    data.update(overrides)
    return data


# =============================================================================
# Storage Fixtures
# =============================================================================


@pytest.fixture
def db():
    """A fresh database so ids and rows never leak between tests."""
    return MemoryDatabase()


@pytest.fixture
def user_repo(db):
    return UserRepository(db)


@pytest.fixture
def portfolio_repo(db):
    return PortfolioRepository(db)


@pytest.fixture
def holding_repo(db):
    return HoldingRepository(db)


# =============================================================================
# Service / App Fixtures
# =============================================================================


@pytest.fixture
def sentiment_provider():
    return FixedSentimentProvider(MarketSentiment.BULLISH)


@pytest.fixture
def portfolio_service(user_repo, portfolio_repo, holding_repo, sentiment_provider):
    return PortfolioService(
        user_repo=user_repo,
        portfolio_repo=portfolio_repo,
        holding_repo=holding_repo,
        sentiment_provider=sentiment_provider,
    )


@pytest.fixture
def client(db, sentiment_provider):
    app = create_app(db=db, sentiment_provider=sentiment_provider)
    with TestClient(app) as test_client:
        yield test_client


def upload(client, content: str, filename: str = "holdings.csv", content_type: str = "text/csv"):
    return client.post(
        "/api/upload-csv",
        files={"csvFile": (filename, content.encode("utf-8"), content_type)},
    )
