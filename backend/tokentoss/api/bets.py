from fastapi import APIRouter, HTTPException
from tokentoss.core.exceptions import InvalidBet
from tokentoss.services.odds_format import format_american
from tokentoss.services.payout import quote_bet

router = APIRouter()


# payout preview for the bet slip
@router.get("/quote")
async def get_quote(wager: int, odds: int):
    try:
        quote = quote_bet(wager, odds)
    except InvalidBet as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {
        "wager": quote.wager,
        "odds": format_american(quote.odds),
        "potential_payout": quote.potential_payout,
        "profit_if_won": quote.profit_if_won,
    }
