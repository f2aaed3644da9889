# Main FastAPI application
from fastapi import FastAPI
from tokentoss.api import bets, games, health
from tokentoss.core.config import settings
from tokentoss.db.base import Base
from tokentoss.db.game_store import SqlGameStore
from tokentoss.db.session import engine
from tokentoss.jobs.auto_refresh import AutoRefresher
from tokentoss.services.odds_cache import OddsCache
from tokentoss.services.theodds_client import TheOddsClient
import logging

# for logging in fastapi
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)
# httpx logs full request urls, which carry the odds api key
logging.getLogger("httpx").setLevel(logging.WARNING)


app = FastAPI(title="TokenToss Odds API")

app.include_router(health.router)
app.include_router(games.router, prefix="/games", tags=["Games"])
app.include_router(bets.router, prefix="/bets", tags=["Bets"])


@app.on_event("startup")
async def startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app.state.odds_cache = OddsCache(
        provider=TheOddsClient(),
        store=SqlGameStore(),
        fetch_timeout=settings.THEODDS_TIMEOUT_SECONDS + 5,
    )
    app.state.refresher = AutoRefresher(app.state.odds_cache)
    app.state.refresher.start()


@app.on_event("shutdown")
async def shutdown():
    await app.state.refresher.stop()
    await engine.dispose()


@app.get("/")
def root():
    return {"message": "TokenToss Odds API running"}
