import enum
import uuid
from sqlalchemy import Column, Text, Integer, BigInteger, Uuid, Enum, ForeignKey
from tokentoss.db.base import Base, UTCDateTime, utcnow
from tokentoss.services.odds_format import format_american
from tokentoss.services import payout


class BetStatus(str, enum.Enum):
    PENDING = "pending"
    WON = "won"
    LOST = "lost"
    CANCELLED = "cancelled"


# Bets are created by the placement flow and settled by the hosted place_bet /
# settlement procedures. This service only reads them.
class Bet(Base):
    __tablename__ = "bets"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False)
    game_id = Column(Uuid, ForeignKey("nfl_games.id", ondelete="CASCADE"), nullable=False)
    group_id = Column(Uuid)

    bet_type = Column(Text, nullable=False, default="moneyline")
    team_bet_on = Column(Text, nullable=False)  # team name, "Over"/"Under"

    wager_amount = Column(BigInteger, nullable=False)
    odds_at_bet = Column(Integer, nullable=False)
    potential_payout = Column(BigInteger, nullable=False)  # fixed at placement

    bet_status = Column(
        Enum(BetStatus, name="bet_status", values_callable=lambda e: [s.value for s in e]),
        nullable=False,
        default=BetStatus.PENDING,
    )
    payout_amount = Column(BigInteger, nullable=False, default=0)

    placed_at = Column(UTCDateTime, nullable=False, default=utcnow)
    settled_at = Column(UTCDateTime)

    @property
    def profit(self) -> int:
        return payout.profit(self.wager_amount, self.potential_payout, self.bet_status)

    @property
    def formatted_odds(self) -> str:
        return format_american(self.odds_at_bet)
