# Contract between the odds sync and whatever fetches raw market data.
# Prices on every RawOutcome handed to the sync are american odds; providers
# that receive decimal prices convert them before returning.
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator
from tokentoss.core.constants import MARKET_KINDS
from tokentoss.core.exceptions import MalformedRecord


class RawOutcome(BaseModel):
    name: str  # team name or "Over" / "Under"
    price: float = Field(allow_inf_nan=False)
    point: float | None = Field(default=None, allow_inf_nan=False)  # spread / total line

    @field_validator("price")
    @classmethod
    def price_not_zero(cls, value: float) -> float:
        if value == 0:
            raise ValueError("price can't be 0")
        return value


class RawMarket(BaseModel):
    key: str  # h2h, spreads, totals
    outcomes: list[RawOutcome] = []

    @property
    def kind(self) -> str | None:
        if self.key in MARKET_KINDS.values():
            return self.key
        return MARKET_KINDS.get(self.key)


class RawBookmaker(BaseModel):
    key: str
    title: str = ""
    markets: list[RawMarket] = []


class RawGame(BaseModel):
    id: str
    home_team: str
    away_team: str
    commence_time: str  # ISO-8601, parsed by start_time()
    sport_key: str | None = None
    bookmakers: list[RawBookmaker] = []

    def start_time(self) -> datetime:
        try:
            start = datetime.fromisoformat(self.commence_time.replace("Z", "+00:00"))
        except ValueError:
            raise MalformedRecord(
                self.id, f"unparseable commence_time {self.commence_time!r}"
            ) from None
        if start.tzinfo is None:
            start = start.replace(tzinfo=timezone.utc)
        return start


@dataclass
class ProviderUsage:
    requests_remaining: int | None = None
    requests_used: int | None = None
    last_request_cost: int | None = None

    def to_dict(self) -> dict:
        return {
            "requests_remaining": self.requests_remaining,
            "requests_used": self.requests_used,
            "last_request_cost": self.last_request_cost,
        }


@dataclass
class OddsFeed:
    games: list[RawGame] = field(default_factory=list)
    # records the provider returned but that failed validation
    rejected: list[MalformedRecord] = field(default_factory=list)
    usage: ProviderUsage | None = None


class OddsProvider(ABC):
    """Fetches upcoming games with bookmaker quotes.

    Every call counts against a monthly quota. Any transport or status
    failure must surface as ProviderError.
    """

    @abstractmethod
    async def fetch_upcoming(self) -> OddsFeed:
        raise NotImplementedError
