from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, computed_field, field_validator
from pydantic.alias_generators import to_camel

from ..entities.holding import InstrumentType, MarketSentiment
from ..ingest.classifier import instrument_display_name


MAGNITUDE_FIELDS = ("quantity", "avg_cost", "ltp", "invested", "current_value")
SIGNED_FIELDS = ("pnl", "pnl_percent", "day_change", "day_change_percent")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def _check_decimal(value: str, non_negative: bool = False) -> str:
    try:
        number = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"'{value}' is not a decimal number")
    if not number.is_finite():
        raise ValueError(f"'{value}' is not a finite number")
    if non_negative and number < 0:
        raise ValueError(f"'{value}' must not be negative")
    return value


def validation_errors(exc: ValidationError, **context: Any) -> List[Dict[str, Any]]:
    """Flattens pydantic errors into JSON-safe dicts for the API response."""
    return [
        {
            **context,
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
        }
        for error in exc.errors()
    ]


class CsvRow(CamelModel):
    instrument: str
    quantity: str = "0"
    avg_cost: str = "0"
    ltp: str = "0"
    invested: str = "0"
    current_value: str = "0"
    pnl: str = "0"
    net_change: str = "0"
    day_change: str = "0"

    @field_validator('instrument')
    def validate_instrument(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Instrument name is required')
        return v


class CsvUploadData(BaseModel):
    data: List[CsvRow]


class HoldingCreate(CamelModel):
    portfolio_id: int
    instrument: str
    instrument_type: InstrumentType
    quantity: str
    avg_cost: str
    ltp: str
    invested: str
    current_value: str
    pnl: str
    pnl_percent: str
    day_change: str
    day_change_percent: str
    company_name: Optional[str] = None
    sector: Optional[str] = None
    market_sentiment: Optional[MarketSentiment] = None

    @field_validator('instrument')
    def validate_instrument(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Instrument name is required')
        return v

    @field_validator(*MAGNITUDE_FIELDS)
    def validate_magnitude(cls, v):
        return _check_decimal(v, non_negative=True)

    @field_validator(*SIGNED_FIELDS)
    def validate_signed(cls, v):
        return _check_decimal(v)


class HoldingUpdate(CamelModel):
    instrument: Optional[str] = None
    quantity: Optional[str] = None
    avg_cost: Optional[str] = None
    ltp: Optional[str] = None
    invested: Optional[str] = None
    current_value: Optional[str] = None
    pnl: Optional[str] = None
    day_change: Optional[str] = None
    company_name: Optional[str] = None
    sector: Optional[str] = None
    market_sentiment: Optional[MarketSentiment] = None

    @field_validator('instrument')
    def validate_instrument(cls, v):
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError('Instrument name is required')
        return v

    @field_validator(*MAGNITUDE_FIELDS)
    def validate_magnitude(cls, v):
        if v is None:
            return v
        return _check_decimal(v, non_negative=True)

    @field_validator('pnl', 'day_change')
    def validate_signed(cls, v):
        if v is None:
            return v
        return _check_decimal(v)


class PortfolioDTO(CamelModel):
    id: int
    user_id: int
    name: str
    created_at: datetime


class HoldingDTO(CamelModel):
    id: int
    portfolio_id: int
    instrument: str
    instrument_type: InstrumentType
    quantity: str
    avg_cost: str
    ltp: str
    invested: str
    current_value: str
    pnl: str
    pnl_percent: str
    day_change: str
    day_change_percent: str
    company_name: Optional[str] = None
    sector: Optional[str] = None
    market_sentiment: Optional[MarketSentiment] = None

    @computed_field(alias="instrumentTypeDisplay")
    @property
    def instrument_type_display(self) -> str:
        return instrument_display_name(self.instrument_type)


class PortfolioResponse(CamelModel):
    portfolio: PortfolioDTO
    holdings: List[HoldingDTO]


class UploadResult(CamelModel):
    message: str
    holdings_count: int


class AllocationSlice(CamelModel):
    instrument_type: InstrumentType
    value: Decimal
    percentage: Decimal
    count: int


class PortfolioSummary(CamelModel):
    total_invested: Decimal
    total_current_value: Decimal
    total_pnl: Decimal
    total_pnl_percent: Decimal
    total_day_change: Decimal
    day_change_percent: Decimal
    allocation: List[AllocationSlice]
    top_performers: List[HoldingDTO]
    item_count: int


class ClassificationResult(CamelModel):
    instrument: str
    instrument_type: InstrumentType
    display_name: str
