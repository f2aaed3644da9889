import uuid
from tokentoss.models.bet import Bet, BetStatus
from tokentoss.services.payout import potential_payout


def new_bet(
    user_id: uuid.UUID,
    game_id: uuid.UUID,
    team_bet_on: str,
    wager_amount: int,
    odds_at_bet: int,
    bet_type: str = "moneyline",
    group_id: uuid.UUID | None = None,
) -> Bet:
    """
    Build a pending bet with the odds locked in. potential_payout is worked
    out here once and never recomputed, even if settlement happens at
    different odds. Raises InvalidBet for a non-positive wager or 0 odds.
    """
    return Bet(
        user_id=user_id,
        game_id=game_id,
        group_id=group_id,
        bet_type=bet_type,
        team_bet_on=team_bet_on,
        wager_amount=wager_amount,
        odds_at_bet=odds_at_bet,
        potential_payout=potential_payout(wager_amount, odds_at_bet),
        bet_status=BetStatus.PENDING,
        payout_amount=0,
    )
