# Errors raised inside the odds sync core. None of them escape OddsCache.sync,
# they are reported back through SyncResult instead.


class TokenTossError(Exception):
    pass


class ProviderError(TokenTossError):
    """The odds provider could not be reached or returned a bad response."""


class MalformedRecord(TokenTossError):
    """A single provider game could not be parsed (bad start time, missing field)."""

    def __init__(self, external_id: str | None, reason: str):
        self.external_id = external_id
        self.reason = reason
        super().__init__(f"{external_id or '<unknown>'}: {reason}")


class StoreError(TokenTossError):
    """A write or read against the game store failed."""


class InvalidBet(TokenTossError, ValueError):
    """Wager or odds can't be used to compute a payout."""
