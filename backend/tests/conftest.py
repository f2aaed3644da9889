import asyncio
import uuid
from datetime import datetime, timedelta, timezone

import pytest

from tokentoss.core.exceptions import ProviderError, StoreError
from tokentoss.db.game_store import GameStore
from tokentoss.models.game import Game
from tokentoss.services.odds_provider import OddsFeed, OddsProvider, ProviderUsage, RawGame

NOW = datetime(2025, 12, 28, 18, 0, tzinfo=timezone.utc)


class FakeProvider(OddsProvider):
    def __init__(self, games=None, error=None, delay=0):
        self.games = games or []
        self.error = error
        self.delay = delay
        self.calls = 0
        self.rejected = []

    async def fetch_upcoming(self) -> OddsFeed:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise ProviderError(self.error)
        return OddsFeed(
            games=[RawGame.model_validate(g) for g in self.games],
            rejected=list(self.rejected),
            usage=ProviderUsage(requests_remaining=499 - self.calls, requests_used=self.calls),
        )


class InMemoryGameStore(GameStore):
    def __init__(self):
        self.games = {}
        self.snapshots = []
        self._staged_games = []
        self._staged_snapshots = []
        self.fail_snapshot_for = set()  # external ids
        self.block_snapshots = False
        self.snapshot_entered = asyncio.Event()
        self.rollbacks = 0

    def add_game(self, external_id, commence_time, is_completed=False):
        game = Game(
            id=uuid.uuid4(),
            external_id=external_id,
            home_team="Kansas City Chiefs",
            away_team="Denver Broncos",
            commence_time=commence_time,
            is_completed=is_completed,
        )
        self.games[game.id] = game
        return game

    async def find_by_external_id(self, external_id):
        for game in self.games.values():
            if game.external_id == external_id:
                return game
        return None

    async def insert_game(self, game):
        game.id = uuid.uuid4()
        self._staged_games.append(game)
        return game

    async def insert_odds_snapshot(self, snapshot):
        external_ids = {
            g.external_id
            for g in list(self.games.values()) + self._staged_games
            if g.id == snapshot.game_id
        }
        if external_ids & self.fail_snapshot_for:
            raise StoreError("insert odds failed: disk full")
        if self.block_snapshots:
            self.snapshot_entered.set()
            await asyncio.Event().wait()
        self._staged_snapshots.append(snapshot)

    async def list_upcoming(self, since, limit):
        games = [g for g in self.games.values() if g.commence_time >= since]
        return sorted(games, key=lambda g: g.commence_time)[:limit]

    async def latest_snapshot(self, game_id):
        snapshots = [s for s in self.snapshots if s.game_id == game_id]
        if not snapshots:
            return None
        return max(snapshots, key=lambda s: s.captured_at)

    async def commit(self):
        for game in self._staged_games:
            self.games[game.id] = game
        self.snapshots.extend(self._staged_snapshots)
        self._staged_games = []
        self._staged_snapshots = []

    async def rollback(self):
        self.rollbacks += 1
        self._staged_games = []
        self._staged_snapshots = []


def make_raw_game(
    external_id="evt-1",
    home="Kansas City Chiefs",
    away="Denver Broncos",
    commence_time=None,
    bookmakers=None,
):
    commence_time = commence_time or (NOW + timedelta(days=1)).isoformat().replace(
        "+00:00", "Z"
    )
    if bookmakers is None:
        bookmakers = [
            {
                "key": "draftkings",
                "title": "DraftKings",
                "markets": [
                    {
                        "key": "h2h",
                        "outcomes": [
                            {"name": home, "price": -150},
                            {"name": away, "price": 130},
                        ],
                    }
                ],
            }
        ]
    return {
        "id": external_id,
        "sport_key": "americanfootball_nfl",
        "sport_title": "NFL",
        "commence_time": commence_time,
        "home_team": home,
        "away_team": away,
        "bookmakers": bookmakers,
    }


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def raw_game():
    return make_raw_game


@pytest.fixture
def store():
    return InMemoryGameStore()


@pytest.fixture
def provider_factory():
    return FakeProvider
