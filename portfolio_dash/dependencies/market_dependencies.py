from ..services.market_service import MarketService

def get_market_service() -> MarketService:
    return MarketService()
