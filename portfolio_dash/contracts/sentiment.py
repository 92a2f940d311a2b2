from typing import Protocol

from ..entities.holding import MarketSentiment


class SentimentProvider(Protocol):
    def get_sentiment(self, instrument: str) -> MarketSentiment: ...
