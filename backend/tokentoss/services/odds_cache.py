"""
Quota-aware odds sync.

The odds API is metered, so the provider is only called when the last
successful fetch is older than CACHE_DURATION and there is at least one game
that hasn't kicked off yet. Everything else is served from the game store.
"""
import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from tokentoss.core.constants import CACHE_DURATION, UPCOMING_LIMIT, UPCOMING_LOOKBACK
from tokentoss.core.exceptions import MalformedRecord, ProviderError, StoreError
from tokentoss.db.game_store import GameStore
from tokentoss.models.game import Game
from tokentoss.models.odds import OddsSnapshot
from tokentoss.services.normalize import normalize_markets
from tokentoss.services.odds_provider import OddsProvider, ProviderUsage, RawGame

logger = logging.getLogger(__name__)


@dataclass
class SyncFailure:
    kind: str  # "malformed" or "store"
    reason: str
    external_id: str | None = None

    def to_dict(self) -> dict:
        return {"kind": self.kind, "reason": self.reason, "external_id": self.external_id}


@dataclass
class SyncResult:
    games: list[Game] = field(default_factory=list)
    snapshot_by_game: dict[uuid.UUID, OddsSnapshot] = field(default_factory=dict)
    did_call_provider: bool = False
    provider_error: str | None = None
    failures: list[SyncFailure] = field(default_factory=list)
    usage: ProviderUsage | None = None

    @property
    def partial_failure(self) -> str | None:
        """Why this result is incomplete, None when nothing went wrong."""
        if self.provider_error:
            return self.provider_error
        if self.failures:
            return f"{len(self.failures)} record(s) skipped: {self.failures[0].reason}"
        return None


class OddsCache:
    def __init__(
        self,
        provider: OddsProvider,
        store: GameStore,
        fetch_timeout: float | None = None,
    ):
        self.provider = provider
        self.store = store
        self.fetch_timeout = fetch_timeout

        # time of the last successful provider call, None until the first one
        self.last_fetch_at: datetime | None = None

        # one sync at a time, so two callers can't both decide a fetch is due
        self._lock = asyncio.Lock()

    def should_fetch(self, now: datetime, games: list[Game]) -> bool:
        if self.last_fetch_at is None:
            return True
        if now - self.last_fetch_at <= CACHE_DURATION:
            return False
        # expired, but nothing left to refresh
        return any(game.is_upcoming(now) for game in games)

    async def sync(self, now: datetime) -> SyncResult:
        async with self._lock:
            return await self._sync(now)

    async def force_sync(self, now: datetime) -> SyncResult:
        """Ignore the cache and always call the provider. Spends quota."""
        async with self._lock:
            self.last_fetch_at = None
            return await self._sync(now)

    async def _sync(self, now: datetime) -> SyncResult:
        result = SyncResult()
        games = await self._load_games(now, result)

        if not self.should_fetch(now, games):
            logger.info(
                f"Serving {len(games)} cached games, last odds fetch at {self.last_fetch_at}"
            )
        else:
            await self._fetch(now, result)
            if result.provider_error is None:
                games = await self._load_games(now, result)

        result.games = games
        for game in games:
            try:
                snapshot = await self.store.latest_snapshot(game.id)
            except StoreError as e:
                logger.warning(f"Could not load odds for game {game.id}: {e}")
                result.failures.append(SyncFailure("store", str(e), game.external_id))
                continue
            if snapshot is not None:
                result.snapshot_by_game[game.id] = snapshot

        return result

    async def _load_games(self, now: datetime, result: SyncResult) -> list[Game]:
        try:
            return await self.store.list_upcoming(now - UPCOMING_LOOKBACK, UPCOMING_LIMIT)
        except StoreError as e:
            logger.error(f"Could not load games: {e}")
            result.failures.append(SyncFailure("store", str(e)))
            return []

    async def _fetch(self, now: datetime, result: SyncResult):
        result.did_call_provider = True
        try:
            if self.fetch_timeout is None:
                feed = await self.provider.fetch_upcoming()
            else:
                feed = await asyncio.wait_for(
                    self.provider.fetch_upcoming(), timeout=self.fetch_timeout
                )
        except asyncio.TimeoutError:
            logger.error(f"Odds fetch timed out after {self.fetch_timeout}s")
            result.provider_error = f"odds provider timed out after {self.fetch_timeout}s"
            return
        except ProviderError as e:
            logger.error(f"Odds fetch failed: {e}")
            result.provider_error = str(e)
            return

        self.last_fetch_at = now
        result.usage = feed.usage

        for record in feed.rejected:
            logger.warning(f"Skipping malformed game {record}")
            result.failures.append(
                SyncFailure("malformed", record.reason, record.external_id)
            )

        saved = 0
        for raw in feed.games:
            if await self._save_game(raw, now, result):
                saved += 1
        logger.info(f"Synced {saved}/{len(feed.games)} games from odds provider")

    # persist one provider game and its best-price snapshot, all or nothing
    async def _save_game(self, raw: RawGame, now: datetime, result: SyncResult) -> bool:
        try:
            commence_time = raw.start_time()
        except MalformedRecord as e:
            logger.warning(f"Skipping malformed game {e}")
            result.failures.append(SyncFailure("malformed", e.reason, raw.id))
            return False

        fields = normalize_markets(raw.bookmakers, raw.home_team, raw.away_team)

        try:
            game = await self.store.find_by_external_id(raw.id)
            if game is None:
                game = await self.store.insert_game(
                    Game(
                        external_id=raw.id,
                        home_team=raw.home_team,
                        away_team=raw.away_team,
                        commence_time=commence_time,
                        is_completed=False,
                    )
                )
            if not fields.is_empty():
                await self.store.insert_odds_snapshot(
                    OddsSnapshot(game_id=game.id, captured_at=now, **fields.as_dict())
                )
            await self.store.commit()
        except StoreError as e:
            await self.store.rollback()
            logger.warning(f"Failed saving game {raw.id}: {e}")
            result.failures.append(SyncFailure("store", str(e), raw.id))
            return False
        except asyncio.CancelledError:
            await self.store.rollback()
            raise

        return True
