from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..core.logger import logger
from ..dependencies.market_dependencies import get_market_service
from ..services.market_service import MarketService

router = APIRouter()

@router.get("/api/market-sentiment")
async def get_market_sentiment(
    market_service: MarketService = Depends(get_market_service),
):
    try:
        data = market_service.get_market_sentiment()
        return JSONResponse(data.model_dump(by_alias=True, mode="json"))
    except Exception as e:
        logger.error(f"Error fetching market sentiment: {e}")
        return JSONResponse({"message": "Failed to fetch market sentiment"}, status_code=500)
