import uuid
from sqlalchemy import Column, Text, Integer, Boolean, Uuid, UniqueConstraint
from tokentoss.db.base import Base, UTCDateTime, utcnow


class Game(Base):
    __tablename__ = "nfl_games"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    external_id = Column(Text, nullable=False)  # event id from the-odds-api

    home_team = Column(Text, nullable=False)
    away_team = Column(Text, nullable=False)
    commence_time = Column(UTCDateTime, nullable=False)

    home_score = Column(Integer)
    away_score = Column(Integer)
    is_completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (UniqueConstraint("external_id", name="uq_game_external_id"),)

    # kickoff has passed but no final score yet
    def is_live(self, now) -> bool:
        return self.commence_time <= now and not self.is_completed

    # not completed and not started, i.e. odds are still worth refreshing
    def is_upcoming(self, now) -> bool:
        return not self.is_completed and self.commence_time > now
