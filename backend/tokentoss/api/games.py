# Games + current odds for the app. Reads go through the odds cache so the
# metered odds api is only hit when the cache policy allows it.
from fastapi import APIRouter, Depends, Request
from tokentoss.db.base import utcnow
from tokentoss.services.odds_cache import OddsCache, SyncResult

router = APIRouter()


def get_odds_cache(request: Request) -> OddsCache:
    return request.app.state.odds_cache


def serialize_game(game, snapshot, now) -> dict:
    return {
        "id": str(game.id),
        "external_id": game.external_id,
        "home_team": game.home_team,
        "away_team": game.away_team,
        "commence_time": game.commence_time.isoformat(),
        "home_score": game.home_score,
        "away_score": game.away_score,
        "is_completed": game.is_completed,
        "is_live": game.is_live(now),
        "odds": snapshot.to_dict() if snapshot is not None else None,
    }


def serialize_result(result: SyncResult, cache: OddsCache, now) -> dict:
    return {
        "games": [
            serialize_game(g, result.snapshot_by_game.get(g.id), now)
            for g in result.games
        ],
        "did_call_provider": result.did_call_provider,
        "last_api_call": cache.last_fetch_at.isoformat() if cache.last_fetch_at else None,
        "usage": result.usage.to_dict() if result.usage else None,
        "partial_failure": result.partial_failure,
        "failures": [f.to_dict() for f in result.failures],
    }


# cached games with their latest odds
@router.get("")
async def list_games(cache: OddsCache = Depends(get_odds_cache)):
    now = utcnow()
    result = await cache.sync(now)
    return serialize_result(result, cache, now)


# manual refresh, always spends one api request
@router.post("/refresh")
async def refresh_games(cache: OddsCache = Depends(get_odds_cache)):
    now = utcnow()
    result = await cache.force_sync(now)
    return serialize_result(result, cache, now)
