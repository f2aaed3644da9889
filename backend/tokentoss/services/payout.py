# Payout math for american odds. Integer tokens only, no floats involved.
from dataclasses import dataclass
from tokentoss.core.exceptions import InvalidBet


def _validate(wager: int, american_odds: int):
    if isinstance(wager, bool) or not isinstance(wager, int):
        raise InvalidBet("wager must be a whole number of tokens")
    if isinstance(american_odds, bool) or not isinstance(american_odds, int):
        raise InvalidBet("odds must be whole american odds")
    if wager <= 0:
        raise InvalidBet("wager must be positive")
    if american_odds == 0:
        raise InvalidBet("american odds can't be 0")


def potential_payout(wager: int, american_odds: int) -> int:
    """Total returned on a win, stake included.

    +150 on 100 pays 250, -200 on 100 pays 150. Division truncates.
    """
    _validate(wager, american_odds)
    if american_odds > 0:
        return wager + wager * american_odds // 100
    return wager + wager * 100 // abs(american_odds)


def profit(wager: int, payout: int, status) -> int:
    # status may be a BetStatus or its raw string value
    if status == "won":
        return payout - wager
    if status == "lost":
        return -wager
    return 0


@dataclass(frozen=True)
class BetQuote:
    wager: int
    odds: int
    potential_payout: int

    @property
    def profit_if_won(self) -> int:
        return profit(self.wager, self.potential_payout, "won")


def quote_bet(wager: int, american_odds: int) -> BetQuote:
    return BetQuote(
        wager=wager,
        odds=american_odds,
        potential_payout=potential_payout(wager, american_odds),
    )
