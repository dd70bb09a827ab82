"""
FairPlay - Engine Errors

Every error raised by the engine is local and recoverable by the caller.
Validation errors also subclass ValueError so callers that only care about
bad input can catch that.
"""


class FairPlayError(Exception):
    """Base engine error."""


class InvalidSeed(FairPlayError, ValueError):
    """Empty or malformed server or client seed."""


class InvalidNonce(FairPlayError, ValueError):
    """Negative or non-integer nonce."""


class InvalidBetParameters(FairPlayError, ValueError):
    """Bet parameters out of range or not matching the game."""


class NonceReuseError(FairPlayError):
    """Caller tried to resolve with a nonce other than the session's current one."""

    def __init__(self, expected: int, provided: int) -> None:
        super().__init__(f"Nonce {provided} rejected, session is at nonce {expected}.")
        self.expected = expected
        self.provided = provided


class SessionClosedError(FairPlayError):
    """The session's seeds were rotated; it can no longer resolve bets."""


class InvalidMoveError(FairPlayError):
    """Minesweeper action not allowed in the round's current state."""


class SeedTamperedError(FairPlayError):
    """Revealed server seed does not hash to the published commitment."""


class OutcomeMismatchError(FairPlayError):
    """Recomputed outcome differs from the one shown to the player."""
