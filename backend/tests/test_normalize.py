from tokentoss.services.normalize import normalize_markets
from tokentoss.services.odds_provider import RawBookmaker

HOME = "Buffalo Bills"
AWAY = "Miami Dolphins"


def books(*markets_per_book):
    return [
        RawBookmaker.model_validate({"key": f"book{i}", "markets": markets})
        for i, markets in enumerate(markets_per_book)
    ]


def h2h(home_price, away_price):
    return {
        "key": "h2h",
        "outcomes": [
            {"name": HOME, "price": home_price},
            {"name": AWAY, "price": away_price},
        ],
    }


def test_moneyline_keeps_highest_positive_price():
    fields = normalize_markets(books([h2h(-180, 150)], [h2h(-170, 120)]), HOME, AWAY)
    assert fields.away_moneyline == 150
    assert fields.home_moneyline == -170


def test_moneyline_max_wins_for_negative_prices():
    fields = normalize_markets(books([h2h(-110, 100)], [h2h(-105, 100)]), HOME, AWAY)
    assert fields.home_moneyline == -105


def test_spread_line_travels_with_best_price():
    fields = normalize_markets(
        books(
            [
                {
                    "key": "spreads",
                    "outcomes": [
                        {"name": HOME, "price": -110, "point": -3.5},
                        {"name": AWAY, "price": -105, "point": 3.5},
                    ],
                }
            ],
            [
                {
                    "key": "spreads",
                    "outcomes": [
                        {"name": HOME, "price": -105, "point": -3.0},
                        {"name": AWAY, "price": -115, "point": 3.0},
                    ],
                }
            ],
        ),
        HOME,
        AWAY,
    )
    assert (fields.home_spread, fields.home_spread_odds) == (-3.0, -105)
    assert (fields.away_spread, fields.away_spread_odds) == (3.5, -105)
    assert fields.home_moneyline is None


def test_spread_outcome_without_line_is_ignored():
    fields = normalize_markets(
        books(
            [
                {
                    "key": "spreads",
                    "outcomes": [
                        {"name": HOME, "price": 500},
                        {"name": HOME, "price": -110, "point": -2.5},
                    ],
                }
            ]
        ),
        HOME,
        AWAY,
    )
    assert fields.home_spread_odds == -110
    assert fields.home_spread == -2.5


def test_totals_match_over_under_labels():
    fields = normalize_markets(
        books(
            [
                {
                    "key": "totals",
                    "outcomes": [
                        {"name": "Over", "price": -110, "point": 47.5},
                        {"name": "Under", "price": -110, "point": 47.5},
                        {"name": "over", "price": 200, "point": 40.0},
                    ],
                }
            ],
            [
                {
                    "key": "totals",
                    "outcomes": [
                        {"name": "Over", "price": -120, "point": 46.5},
                        {"name": "Under", "price": -102, "point": 48.0},
                    ],
                }
            ],
        ),
        HOME,
        AWAY,
    )
    assert (fields.total_over_line, fields.total_over_odds) == (47.5, -110)
    assert (fields.total_under_line, fields.total_under_odds) == (48.0, -102)


def test_tie_keeps_first_seen_outcome():
    fields = normalize_markets(
        books(
            [{"key": "totals", "outcomes": [{"name": "Over", "price": -110, "point": 47.5}]}],
            [{"key": "totals", "outcomes": [{"name": "Over", "price": -110, "point": 48.5}]}],
        ),
        HOME,
        AWAY,
    )
    assert fields.total_over_line == 47.5


def test_canonical_market_names_are_accepted():
    fields = normalize_markets(
        books([{"key": "moneyline", "outcomes": [{"name": HOME, "price": 110}]}]),
        HOME,
        AWAY,
    )
    assert fields.home_moneyline == 110


def test_unknown_teams_and_markets_are_ignored():
    fields = normalize_markets(
        books(
            [
                {"key": "h2h", "outcomes": [{"name": "New York Jets", "price": 300}]},
                {"key": "player_points", "outcomes": [{"name": HOME, "price": 100}]},
            ]
        ),
        HOME,
        AWAY,
    )
    assert fields.is_empty()


def test_no_bookmakers_gives_empty_fields():
    assert normalize_markets([], HOME, AWAY).is_empty()
