import uuid
from sqlalchemy import Column, Integer, Float, Uuid, ForeignKey, Index
from tokentoss.db.base import Base, UTCDateTime, utcnow
from tokentoss.services.odds_format import format_american, format_line


class OddsSnapshot(Base):
    __tablename__ = "odds"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    game_id = Column(Uuid, ForeignKey("nfl_games.id", ondelete="CASCADE"), nullable=False)

    # moneyline (american odds)
    home_moneyline = Column(Integer)
    away_moneyline = Column(Integer)

    # spread, line and price always come from the same outcome
    home_spread = Column(Float)
    home_spread_odds = Column(Integer)
    away_spread = Column(Float)
    away_spread_odds = Column(Integer)

    # totals
    total_over_line = Column(Float)
    total_over_odds = Column(Integer)
    total_under_line = Column(Float)
    total_under_odds = Column(Integer)

    captured_at = Column(UTCDateTime, nullable=False, default=utcnow)

    __table_args__ = (Index("ix_odds_game_captured", "game_id", "captured_at"),)

    @property
    def has_spread(self) -> bool:
        return self.home_spread is not None and self.home_spread_odds is not None

    @property
    def has_totals(self) -> bool:
        return self.total_over_line is not None and self.total_over_odds is not None

    def formatted_moneyline(self, is_home: bool) -> str:
        return format_american(self.home_moneyline if is_home else self.away_moneyline)

    def formatted_spread(self, is_home: bool) -> str:
        return format_line(self.home_spread if is_home else self.away_spread)

    def formatted_spread_odds(self, is_home: bool) -> str:
        return format_american(
            self.home_spread_odds if is_home else self.away_spread_odds
        )

    def formatted_total(self, is_over: bool) -> str:
        line = self.total_over_line if is_over else self.total_under_line
        return "N/A" if line is None else str(line)

    def formatted_total_odds(self, is_over: bool) -> str:
        return format_american(
            self.total_over_odds if is_over else self.total_under_odds
        )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id) if self.id else None,
            "game_id": str(self.game_id),
            "home_moneyline": self.home_moneyline,
            "away_moneyline": self.away_moneyline,
            "home_spread": self.home_spread,
            "home_spread_odds": self.home_spread_odds,
            "away_spread": self.away_spread,
            "away_spread_odds": self.away_spread_odds,
            "total_over_line": self.total_over_line,
            "total_over_odds": self.total_over_odds,
            "total_under_line": self.total_under_line,
            "total_under_odds": self.total_under_odds,
            "captured_at": self.captured_at.isoformat() if self.captured_at else None,
        }
