# Persistence for games and odds snapshots.
#
# A GameStore is a small unit of work: insert_game / insert_odds_snapshot are
# staged until commit(), rollback() throws them away. The odds sync commits
# once per provider game so a game and its snapshot land together or not at all.
import logging
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from tokentoss.core.exceptions import StoreError
from tokentoss.db.session import SessionLocal
from tokentoss.models.game import Game
from tokentoss.models.odds import OddsSnapshot

logger = logging.getLogger(__name__)


class GameStore(ABC):
    @abstractmethod
    async def find_by_external_id(self, external_id: str) -> Game | None: ...

    @abstractmethod
    async def insert_game(self, game: Game) -> Game:
        """Stage a new game and return it with its internal id assigned."""

    @abstractmethod
    async def insert_odds_snapshot(self, snapshot: OddsSnapshot) -> None: ...

    @abstractmethod
    async def list_upcoming(self, since: datetime, limit: int) -> list[Game]:
        """Games starting at or after `since`, earliest first."""

    @abstractmethod
    async def latest_snapshot(self, game_id: uuid.UUID) -> OddsSnapshot | None: ...

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...


@contextmanager
def _store_errors(action: str):
    try:
        yield
    except SQLAlchemyError as e:
        raise StoreError(f"{action} failed: {e}") from e


class SqlGameStore(GameStore):
    """GameStore over the async SQLAlchemy session factory.

    Reads run in their own short-lived session. Writes share one session that
    is opened on first use and closed by commit() or rollback().
    """

    def __init__(self, session_factory: async_sessionmaker = SessionLocal):
        self.session_factory = session_factory
        self._uow: AsyncSession | None = None

    def _writer(self) -> AsyncSession:
        if self._uow is None:
            self._uow = self.session_factory()
        return self._uow

    async def find_by_external_id(self, external_id: str) -> Game | None:
        with _store_errors("find game"):
            async with self.session_factory() as db:
                res = await db.execute(
                    select(Game).where(Game.external_id == external_id)
                )
                return res.scalar_one_or_none()

    async def insert_game(self, game: Game) -> Game:
        with _store_errors("insert game"):
            db = self._writer()
            db.add(game)
            await db.flush()  # assigns the id without committing
            return game

    async def insert_odds_snapshot(self, snapshot: OddsSnapshot) -> None:
        with _store_errors("insert odds"):
            db = self._writer()
            db.add(snapshot)
            await db.flush()

    async def list_upcoming(self, since: datetime, limit: int) -> list[Game]:
        with _store_errors("list games"):
            async with self.session_factory() as db:
                res = await db.execute(
                    select(Game)
                    .where(Game.commence_time >= since)
                    .order_by(Game.commence_time.asc())
                    .limit(limit)
                )
                return list(res.scalars().all())

    async def latest_snapshot(self, game_id: uuid.UUID) -> OddsSnapshot | None:
        with _store_errors("load odds"):
            async with self.session_factory() as db:
                res = await db.execute(
                    select(OddsSnapshot)
                    .where(OddsSnapshot.game_id == game_id)
                    .order_by(OddsSnapshot.captured_at.desc())
                    .limit(1)
                )
                return res.scalar_one_or_none()

    async def commit(self) -> None:
        if self._uow is None:
            return
        db, self._uow = self._uow, None
        try:
            with _store_errors("commit"):
                await db.commit()
        finally:
            await db.close()

    async def rollback(self) -> None:
        if self._uow is None:
            return
        db, self._uow = self._uow, None
        try:
            with _store_errors("rollback"):
                await db.rollback()
        finally:
            await db.close()
