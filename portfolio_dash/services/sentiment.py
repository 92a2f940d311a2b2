import random
from typing import Optional

from ..contracts.sentiment import SentimentProvider
from ..entities.holding import MarketSentiment

SENTIMENT_WEIGHTS = {
    MarketSentiment.BULLISH: 0.4,
    MarketSentiment.BEARISH: 0.2,
    MarketSentiment.NEUTRAL: 0.3,
    MarketSentiment.STABLE: 0.1,
}


class WeightedRandomSentimentProvider(SentimentProvider):
    """Placeholder until a real sentiment feed is wired in.

    Draws a tag per instrument from fixed weights; results are random and
    carry no information about the instrument.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_sentiment(self, instrument: str) -> MarketSentiment:
        return self.rng.choices(
            list(SENTIMENT_WEIGHTS),
            weights=list(SENTIMENT_WEIGHTS.values()),
        )[0]


class FixedSentimentProvider(SentimentProvider):
    def __init__(self, sentiment: MarketSentiment = MarketSentiment.NEUTRAL):
        self.sentiment = sentiment

    def get_sentiment(self, instrument: str) -> MarketSentiment:
        return self.sentiment
