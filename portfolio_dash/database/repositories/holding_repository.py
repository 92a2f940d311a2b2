from dataclasses import fields, replace
from typing import Any, Dict, List, Optional, Sequence, Union

from ..database import MemoryDatabase
from ...dto.portfolio import HoldingCreate
from ...entities.holding import Holding
from ...core.exceptions import StorageNotFoundError
from ...core.logger import logger

HoldingInput = Union[HoldingCreate, Dict[str, Any]]

MUTABLE_FIELDS = {field.name for field in fields(Holding)} - {"id", "portfolio_id"}


class HoldingRepository:
    def __init__(self, db: MemoryDatabase):
        self.db = db

    def get_by_id(self, holding_id: int) -> Optional[Holding]:
        return self.db.tables["holdings"].get(holding_id)

    def get_by_portfolio_id(self, portfolio_id: int) -> List[Holding]:
        return [
            holding
            for holding in self.db.tables["holdings"].values()
            if holding.portfolio_id == portfolio_id
        ]

    def create(self, holding: HoldingInput) -> Holding:
        return self.create_many([holding])[0]

    def create_many(self, holdings: Sequence[HoldingInput]) -> List[Holding]:
        """Insert a batch, all or nothing.

        Every item is validated before the first id is assigned, so a bad
        item leaves the table exactly as it was. The result keeps input order.
        """
        validated = [
            item if isinstance(item, HoldingCreate) else HoldingCreate.model_validate(item)
            for item in holdings
        ]

        with self.db.lock:
            created = [
                Holding(id=self.db.next_id("holdings"), **item.model_dump())
                for item in validated
            ]
            for holding in created:
                self.db.put("holdings", holding.id, holding)

        return created

    def update(self, holding_id: int, changes: Dict[str, Any]) -> Optional[Holding]:
        try:
            with self.db.lock:
                existing = self.db.get("holdings", holding_id)
                updated = replace(existing, **{
                    key: value for key, value in changes.items() if key in MUTABLE_FIELDS
                })
                self.db.put("holdings", holding_id, updated)
            return updated
        except StorageNotFoundError as e:
            logger.warning(f"Cannot update holding: {e}")
            return None

    def delete(self, holding_id: int) -> bool:
        try:
            self.db.remove("holdings", holding_id)
            return True
        except StorageNotFoundError as e:
            logger.warning(f"Cannot delete holding: {e}")
            return False

    def clear_portfolio(self, portfolio_id: int) -> int:
        return len(self._take_portfolio(portfolio_id))

    def replace_portfolio(self, portfolio_id: int, holdings: Sequence[HoldingInput]) -> List[Holding]:
        """Swap every holding of a portfolio for a new batch.

        Runs under the portfolio lock. If the insert fails the previous
        holdings are put back before the error propagates.
        """
        with self.db.portfolio_lock(portfolio_id):
            removed = self._take_portfolio(portfolio_id)
            try:
                created = self.create_many(holdings)
            except Exception as e:
                with self.db.lock:
                    for holding in removed:
                        self.db.put("holdings", holding.id, holding)
                logger.error(f"Error replacing holdings of portfolio {portfolio_id}: {e}")
                raise

        logger.info(
            f"Replaced {len(removed)} holdings with {len(created)} in portfolio {portfolio_id}"
        )
        return created

    def _take_portfolio(self, portfolio_id: int) -> List[Holding]:
        with self.db.lock:
            removed = self.get_by_portfolio_id(portfolio_id)
            for holding in removed:
                self.db.remove("holdings", holding.id)
        return removed
