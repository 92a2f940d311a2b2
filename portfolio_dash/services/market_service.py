from ..dto.market import MarketSentimentData, SectorPerformance
from ..entities.holding import MarketSentiment


class MarketService:
    """Market-wide mood shown on the dashboard.

    Static figures; there is no market data feed behind this yet.
    """

    def get_market_sentiment(self) -> MarketSentimentData:
        return MarketSentimentData(
            overall_sentiment=MarketSentiment.BULLISH,
            market_trend=2.3,
            volatility_index="moderate",
            sector_performance=[
                SectorPerformance(sector="Technology", performance=5.2),
                SectorPerformance(sector="Energy", performance=3.1),
                SectorPerformance(sector="Banking", performance=-1.8),
                SectorPerformance(sector="Healthcare", performance=2.7),
                SectorPerformance(sector="Consumer Goods", performance=1.9),
            ],
        )
