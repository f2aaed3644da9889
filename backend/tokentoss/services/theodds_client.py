# Client for the-odds-api.com API provider
import httpx
import logging
from pydantic import ValidationError
from tokentoss.core.config import settings
from tokentoss.core.exceptions import MalformedRecord, ProviderError
from tokentoss.services.odds_format import decimal_to_american
from tokentoss.services.odds_provider import (
    OddsFeed,
    OddsProvider,
    ProviderUsage,
    RawGame,
)

logger = logging.getLogger(__name__)


def _header_int(headers, name: str) -> int | None:
    value = headers.get(name)
    if value is None:
        return None
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        return None


class TheOddsClient(OddsProvider):
    def __init__(
        self,
        sport: str | None = None,
        odds_format: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = settings.THEODDS_BASE_URL
        self.api_key = settings.THEODDS_API_KEY
        self.sport = sport or settings.THEODDS_SPORT
        self.regions = settings.THEODDS_REGIONS
        self.markets = settings.THEODDS_MARKETS
        self.odds_format = odds_format or settings.THEODDS_ODDS_FORMAT
        self.timeout = settings.THEODDS_TIMEOUT_SECONDS
        self.transport = transport  # swapped out in tests

        # last known quota, from response headers
        self.usage = ProviderUsage()

    async def fetch_upcoming(self) -> OddsFeed:
        logger.info(f"THE ODDS API CALLED: get_odds ({self.sport})")

        url = f"{self.base_url}/sports/{self.sport}/odds"
        params = {
            "apiKey": self.api_key,
            "regions": self.regions,
            "markets": self.markets,
            "oddsFormat": self.odds_format,
            "dateFormat": "iso",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                res = await client.get(url, params=params)
                res.raise_for_status()
                self._track_usage(res.headers)
                payload = res.json()
        except httpx.HTTPStatusError as e:
            raise ProviderError(
                f"odds api returned status {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ProviderError(f"odds api request failed: {e!r}") from e
        except ValueError as e:
            raise ProviderError("odds api returned invalid json") from e

        if not isinstance(payload, list):
            raise ProviderError("odds api returned an unexpected payload")

        feed = OddsFeed(usage=self.usage)
        for item in payload:
            try:
                game = RawGame.model_validate(item)
            except ValidationError as e:
                external_id = item.get("id") if isinstance(item, dict) else None
                fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
                feed.rejected.append(
                    MalformedRecord(external_id, f"missing or invalid fields: {fields}")
                )
                continue

            if self.odds_format == "decimal":
                self._convert_prices(game)
            feed.games.append(game)

        return feed

    def _track_usage(self, headers):
        remaining = _header_int(headers, "x-requests-remaining")
        used = _header_int(headers, "x-requests-used")
        last = _header_int(headers, "x-requests-last")

        if remaining is not None:
            self.usage.requests_remaining = remaining
            logger.info(f"API requests remaining: {remaining}")
        if used is not None:
            self.usage.requests_used = used
            logger.info(f"API requests used: {used}")
        if last is not None:
            self.usage.last_request_cost = last
            logger.info(f"Last request cost: {last}")

    # decimal prices -> american, in place. unconvertible prices are dropped
    def _convert_prices(self, game: RawGame):
        for bookmaker in game.bookmakers:
            for market in bookmaker.markets:
                converted = []
                for outcome in market.outcomes:
                    try:
                        outcome.price = decimal_to_american(outcome.price)
                    except ValueError as e:
                        logger.warning(
                            f"Dropping {bookmaker.key} {market.key} price for {game.id}: {e}"
                        )
                        continue
                    converted.append(outcome)
                market.outcomes = converted
