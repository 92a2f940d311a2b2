from typing import List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..entities.holding import MarketSentiment


class SectorPerformance(BaseModel):
    sector: str
    performance: float


class MarketSentimentData(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    overall_sentiment: MarketSentiment
    market_trend: float
    volatility_index: str
    sector_performance: List[SectorPerformance]
