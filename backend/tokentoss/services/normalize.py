"""
Fold every bookmaker's quotes for one game into a single best-price row.

For each market and side the outcome with the highest american price wins
(highest is always the most favourable to the bettor, for + and - odds).
Spread and total lines travel with the price they were quoted at. On an
exact tie the first outcome seen is kept, scanning bookmakers, then markets,
then outcomes in the order the provider returned them.
"""
from dataclasses import asdict, dataclass
from tokentoss.core.constants import MONEYLINE, SPREAD, TOTAL, OVER, UNDER
from tokentoss.services.odds_provider import RawBookmaker, RawOutcome


@dataclass
class OddsFields:
    home_moneyline: int | None = None
    away_moneyline: int | None = None
    home_spread: float | None = None
    home_spread_odds: int | None = None
    away_spread: float | None = None
    away_spread_odds: int | None = None
    total_over_line: float | None = None
    total_over_odds: int | None = None
    total_under_line: float | None = None
    total_under_odds: int | None = None

    def is_empty(self) -> bool:
        return all(value is None for value in asdict(self).values())

    def as_dict(self) -> dict:
        return asdict(self)


def _side(kind: str, name: str, home_team: str, away_team: str) -> str | None:
    if kind == TOTAL:
        if name == OVER:
            return "over"
        if name == UNDER:
            return "under"
        return None
    if name == home_team:
        return "home"
    if name == away_team:
        return "away"
    return None


def best_outcomes(
    bookmakers: list[RawBookmaker], home_team: str, away_team: str
) -> dict[tuple[str, str], RawOutcome]:
    best = {}
    for bookmaker in bookmakers:
        for market in bookmaker.markets:
            kind = market.kind
            if kind is None:
                continue
            for outcome in market.outcomes:
                side = _side(kind, outcome.name, home_team, away_team)
                if side is None:
                    continue
                # a spread or total price is meaningless without its line
                if kind != MONEYLINE and outcome.point is None:
                    continue
                current = best.get((kind, side))
                if current is None or outcome.price > current.price:
                    best[(kind, side)] = outcome
    return best


def normalize_markets(
    bookmakers: list[RawBookmaker], home_team: str, away_team: str
) -> OddsFields:
    best = best_outcomes(bookmakers, home_team, away_team)
    fields = OddsFields()

    def price(kind, side):
        outcome = best.get((kind, side))
        return None if outcome is None else int(outcome.price)

    def line(kind, side):
        outcome = best.get((kind, side))
        return None if outcome is None else outcome.point

    fields.home_moneyline = price(MONEYLINE, "home")
    fields.away_moneyline = price(MONEYLINE, "away")

    fields.home_spread = line(SPREAD, "home")
    fields.home_spread_odds = price(SPREAD, "home")
    fields.away_spread = line(SPREAD, "away")
    fields.away_spread_odds = price(SPREAD, "away")

    fields.total_over_line = line(TOTAL, "over")
    fields.total_over_odds = price(TOTAL, "over")
    fields.total_under_line = line(TOTAL, "under")
    fields.total_under_odds = price(TOTAL, "under")

    return fields
