from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..core.logger import logger
from ..dependencies.portfolio_dependencies import get_portfolio_service
from ..dto.portfolio import ClassificationResult, HoldingUpdate
from ..entities.holding import InstrumentType
from ..ingest.classifier import classify_instrument, instrument_display_name
from ..services.portfolio_service import PortfolioService

router = APIRouter()


@router.get("/api/holdings")
async def list_holdings(
    type: Optional[InstrumentType] = Query(None, description="stock, etf or bond"),
    search: Optional[str] = Query("", description="Matches instrument or company name"),
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
):
    holdings = portfolio_service.list_holdings(instrument_type=type, search=search)
    return JSONResponse([h.model_dump(by_alias=True, mode="json") for h in holdings])


@router.patch("/api/holdings/{holding_id}")
async def update_holding(
    holding_id: int,
    update: HoldingUpdate,
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
):
    holding = portfolio_service.update_holding(holding_id, update)
    if not holding:
        return JSONResponse({"message": "Holding not found"}, status_code=404)

    return JSONResponse(holding.model_dump(by_alias=True, mode="json"))


@router.delete("/api/holdings/{holding_id}")
async def delete_holding(
    holding_id: int,
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
):
    if not portfolio_service.delete_holding(holding_id):
        return JSONResponse({"message": "Holding not found"}, status_code=404)

    logger.info(f"Holding {holding_id} deleted")
    return JSONResponse({"message": "Holding deleted"})


@router.get("/api/classify")
async def classify(
    instrument: str = Query(..., min_length=1, description="Instrument symbol or name"),
):
    instrument_type = classify_instrument(instrument)
    result = ClassificationResult(
        instrument=instrument,
        instrument_type=instrument_type,
        display_name=instrument_display_name(instrument_type),
    )
    return JSONResponse(result.model_dump(by_alias=True, mode="json"))
