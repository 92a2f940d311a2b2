from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Portfolio:
    id: int
    user_id: int
    name: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
