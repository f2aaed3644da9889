from datetime import timedelta

# odds api quota policy
CACHE_DURATION = timedelta(minutes=10)

# games window loaded from the store on every sync
UPCOMING_LOOKBACK = timedelta(hours=1)
UPCOMING_LIMIT = 20

# canonical market kinds, keyed by the provider's market keys
MONEYLINE = "moneyline"
SPREAD = "spread"
TOTAL = "total"
MARKET_KINDS = {
    "h2h": MONEYLINE,
    "spreads": SPREAD,
    "totals": TOTAL,
}

OVER = "Over"
UNDER = "Under"
