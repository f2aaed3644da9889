import math


def _round_half_away(value: float) -> int:
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


def decimal_to_american(decimal: float) -> int:
    """Convert decimal odds (2.5) to american odds (+150).

    Anything at or below 1.0 has no american equivalent and raises ValueError.
    """
    if decimal <= 1.0:
        raise ValueError(f"decimal odds must be greater than 1.0, got {decimal}")
    if decimal >= 2.0:
        return _round_half_away((decimal - 1) * 100)
    return _round_half_away(-100 / (decimal - 1))


# +150 / -110, N/A when the book has no price
def format_american(odds: int | None) -> str:
    if odds is None:
        return "N/A"
    return f"+{odds}" if odds > 0 else str(odds)


# +3.5 / -3.5 for spreads
def format_line(line: float | None) -> str:
    if line is None:
        return "N/A"
    return f"+{line}" if line > 0 else str(line)
