from collections import defaultdict
from dataclasses import asdict
from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import ValidationError

from ..config import settings
from ..contracts.repositories import IHoldingRepository, IPortfolioRepository, IUserRepository
from ..contracts.sentiment import SentimentProvider
from ..core.exceptions import SchemaValidationError
from ..core.logger import logger
from ..dto.portfolio import (
    AllocationSlice,
    CsvRow,
    CsvUploadData,
    HoldingCreate,
    HoldingDTO,
    HoldingUpdate,
    PortfolioDTO,
    PortfolioResponse,
    PortfolioSummary,
    UploadResult,
    validation_errors,
)
from ..entities import Holding, InstrumentType, Portfolio
from ..ingest.classifier import classify_instrument
from ..ingest.csv_parser import RawRow, parse_csv
from .metrics import (
    ZERO,
    compute_metrics,
    day_change_percent,
    decimal_sum,
    percent_of,
    pnl_percent,
    to_decimal,
)
from .reference import get_company_name, get_sector


class PortfolioService:
    def __init__(
        self,
        user_repo: IUserRepository,
        portfolio_repo: IPortfolioRepository,
        holding_repo: IHoldingRepository,
        sentiment_provider: SentimentProvider,
    ):
        self.user_repo = user_repo
        self.portfolio_repo = portfolio_repo
        self.holding_repo = holding_repo
        self.sentiment_provider = sentiment_provider

    def get_or_create_portfolio(self, username: Optional[str] = None) -> Portfolio:
        user = self.user_repo.get_or_create(
            username or settings.DEFAULT_USERNAME,
            settings.DEFAULT_PASSWORD,
        )
        return self.portfolio_repo.get_or_create_for_user(user.id, settings.DEFAULT_PORTFOLIO_NAME)

    def get_portfolio_data(self, username: Optional[str] = None) -> PortfolioResponse:
        portfolio = self.get_or_create_portfolio(username)
        holdings = self.holding_repo.get_by_portfolio_id(portfolio.id)

        return PortfolioResponse(
            portfolio=PortfolioDTO.model_validate(portfolio),
            holdings=[HoldingDTO.model_validate(holding) for holding in holdings],
        )

    def upload_csv(self, content: str, username: Optional[str] = None) -> UploadResult:
        """Replace the portfolio's holdings with the rows of an export.

        Parsing, schema validation and construction of every holding happen
        before anything stored is touched, so a rejected file leaves the
        previous holdings in place.
        """
        raw_rows = parse_csv(content)
        upload = self._validate_rows(raw_rows)

        portfolio = self.get_or_create_portfolio(username)
        holdings = self._build_holdings(portfolio.id, upload.data)

        created = self.holding_repo.replace_portfolio(portfolio.id, holdings)
        logger.info(f"Uploaded {len(created)} holdings into portfolio {portfolio.id}")

        return UploadResult(
            message="CSV uploaded and processed successfully",
            holdings_count=len(created),
        )

    def _validate_rows(self, raw_rows: List[RawRow]) -> CsvUploadData:
        try:
            return CsvUploadData.model_validate({"data": raw_rows})
        except ValidationError as e:
            errors = validation_errors(e)
            logger.warning(f"CSV schema validation failed with {len(errors)} errors")
            raise SchemaValidationError("Invalid CSV format", errors)

    def _build_holdings(self, portfolio_id: int, rows: List[CsvRow]) -> List[HoldingCreate]:
        holdings = []
        errors = []

        for index, row in enumerate(rows, start=1):
            metrics = compute_metrics(row)
            try:
                holdings.append(HoldingCreate(
                    portfolio_id=portfolio_id,
                    instrument=row.instrument,
                    instrument_type=classify_instrument(row.instrument),
                    company_name=get_company_name(row.instrument),
                    sector=get_sector(row.instrument),
                    market_sentiment=self.sentiment_provider.get_sentiment(row.instrument),
                    **metrics.as_strings(),
                ))
            except ValidationError as e:
                errors.extend(validation_errors(e, row=index, instrument=row.instrument))

        if errors:
            logger.warning(f"Rejected upload: {len(errors)} invalid holding fields")
            raise SchemaValidationError("Invalid holding data", errors)

        return holdings

    def list_holdings(
        self,
        instrument_type: Optional[InstrumentType] = None,
        search: Optional[str] = None,
        username: Optional[str] = None,
    ) -> List[HoldingDTO]:
        portfolio = self.get_or_create_portfolio(username)
        holdings = self.holding_repo.get_by_portfolio_id(portfolio.id)

        if instrument_type:
            holdings = [h for h in holdings if h.instrument_type == instrument_type]

        if search:
            needle = search.strip().lower()
            holdings = [
                h for h in holdings
                if needle in h.instrument.lower() or needle in (h.company_name or "").lower()
            ]

        return [HoldingDTO.model_validate(h) for h in sorted(holdings, key=lambda h: h.id)]

    def get_portfolio_summary(self, username: Optional[str] = None) -> PortfolioSummary:
        portfolio = self.get_or_create_portfolio(username)
        holdings = self.holding_repo.get_by_portfolio_id(portfolio.id)

        total_invested = decimal_sum(to_decimal(h.invested) for h in holdings)
        total_current_value = decimal_sum(to_decimal(h.current_value) for h in holdings)
        total_pnl = decimal_sum(to_decimal(h.pnl) for h in holdings)
        total_day_change = decimal_sum(to_decimal(h.day_change) for h in holdings)

        return PortfolioSummary(
            total_invested=total_invested,
            total_current_value=total_current_value,
            total_pnl=total_pnl,
            total_pnl_percent=pnl_percent(total_pnl, total_invested),
            total_day_change=total_day_change,
            day_change_percent=day_change_percent(total_day_change, total_current_value),
            allocation=self._allocation(holdings, total_current_value),
            top_performers=[HoldingDTO.model_validate(h) for h in self._top_performers(holdings)],
            item_count=len(holdings),
        )

    def _allocation(self, holdings: List[Holding], total_value) -> List[AllocationSlice]:
        grouped: Dict[InstrumentType, List[Decimal]] = defaultdict(list)
        for holding in holdings:
            grouped[holding.instrument_type].append(to_decimal(holding.current_value))

        values = [
            (instrument_type, decimal_sum(group), len(group))
            for instrument_type, group in grouped.items()
        ]

        return [
            AllocationSlice(
                instrument_type=instrument_type,
                value=value,
                percentage=percent_of(value, total_value) if total_value > 0 else ZERO,
                count=count,
            )
            for instrument_type, value, count in sorted(values, key=lambda item: -item[1])
        ]

    def _top_performers(self, holdings: List[Holding]) -> List[Holding]:
        ranked = sorted(holdings, key=lambda h: to_decimal(h.pnl_percent), reverse=True)
        performers = ranked[:2]

        if ranked:
            worst = ranked[-1]
            if to_decimal(worst.pnl_percent) < 0 and worst not in performers:
                performers.append(worst)

        return performers

    def update_holding(self, holding_id: int, update: HoldingUpdate) -> Optional[HoldingDTO]:
        existing = self.holding_repo.get_by_id(holding_id)
        if not existing:
            return None

        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        merged = {**asdict(existing), **changes}

        metrics = compute_metrics(CsvRow(**{
            field: merged[field]
            for field in ("instrument", "quantity", "avg_cost", "ltp", "invested",
                          "current_value", "pnl", "day_change")
        }))
        changes.update(metrics.as_strings())
        changes["instrument_type"] = classify_instrument(merged["instrument"])

        updated = self.holding_repo.update(holding_id, changes)
        if not updated:
            return None

        logger.info(f"Holding {holding_id} updated: {', '.join(sorted(changes))}")
        return HoldingDTO.model_validate(updated)

    def delete_holding(self, holding_id: int) -> bool:
        return self.holding_repo.delete(holding_id)
