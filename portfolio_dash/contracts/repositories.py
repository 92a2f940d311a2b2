from typing import Any, Dict, List, Optional, Protocol, Sequence, Union

from ..dto.portfolio import HoldingCreate
from ..entities import Holding, Portfolio, User


class IUserRepository(Protocol):
    def get_by_id(self, user_id: int) -> Optional[User]: ...
    def get_by_username(self, username: str) -> Optional[User]: ...
    def create(self, username: str, password: str) -> User: ...
    def get_or_create(self, username: str, password: str) -> User: ...


class IPortfolioRepository(Protocol):
    def get_by_id(self, portfolio_id: int) -> Optional[Portfolio]: ...
    def get_by_user_id(self, user_id: int) -> List[Portfolio]: ...
    def create(self, user_id: int, name: str) -> Portfolio: ...
    def get_or_create_for_user(self, user_id: int, name: str) -> Portfolio: ...


class IHoldingRepository(Protocol):
    def get_by_id(self, holding_id: int) -> Optional[Holding]: ...
    def get_by_portfolio_id(self, portfolio_id: int) -> List[Holding]: ...
    def create(self, holding: Union[HoldingCreate, Dict[str, Any]]) -> Holding: ...
    def create_many(self, holdings: Sequence[Union[HoldingCreate, Dict[str, Any]]]) -> List[Holding]: ...
    def update(self, holding_id: int, changes: Dict[str, Any]) -> Optional[Holding]: ...
    def delete(self, holding_id: int) -> bool: ...
    def clear_portfolio(self, portfolio_id: int) -> int: ...
    def replace_portfolio(self, portfolio_id: int, holdings: Sequence[Union[HoldingCreate, Dict[str, Any]]]) -> List[Holding]: ...
