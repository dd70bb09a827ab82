"""
FairPlay - Outcome Log

CRUD operations for the `bet_outcomes` table. Every resolved bet is logged
here so it can be audited once its session's server seed is revealed.
"""

from supabase import Client

from fairplay.database.models import OutcomeRecord
from fairplay.engine.base import BetParams
from fairplay.engine.service import Resolution


class OutcomeLog:
    """Append-only log of resolved outcomes."""

    def __init__(self, client: Client) -> None:
        self.client = client
        self.table = client.table("bet_outcomes")

    def record(
        self,
        session_id: str,
        resolution: Resolution,
        params: BetParams,
    ) -> OutcomeRecord:
        """Log one resolved bet."""
        outcome = resolution.outcome
        multiplier = resolution.payout_multiplier
        data = (
            self.table
            .insert({
                "session_id": session_id,
                "game": outcome.game.value,
                "nonce": outcome.nonce,
                "bet_amount": str(resolution.bet_amount),
                "params": params.to_dict(),
                "outcome": outcome.to_dict(),
                "payout_multiplier": str(multiplier) if multiplier is not None else None,
                "result_hash": outcome.result_hash,
            })
            .execute()
        )
        return OutcomeRecord.model_validate(data.data[0])

    def settle(self, session_id: str, resolution: Resolution) -> OutcomeRecord:
        """Store the final payout of a settled Minesweeper round."""
        multiplier = resolution.payout_multiplier
        data = (
            self.table
            .update({
                "outcome": resolution.outcome.to_dict(),
                "payout_multiplier": str(multiplier) if multiplier is not None else None,
            })
            .eq("session_id", session_id)
            .eq("nonce", resolution.outcome.nonce)
            .execute()
        )
        if not data.data:
            raise LookupError(
                f"No logged outcome for session {session_id} nonce {resolution.outcome.nonce}."
            )
        return OutcomeRecord.model_validate(data.data[0])

    def get(self, session_id: str, nonce: int) -> OutcomeRecord | None:
        """Get the outcome logged for a session's nonce."""
        data = (
            self.table
            .select("*")
            .eq("session_id", session_id)
            .eq("nonce", nonce)
            .execute()
        )
        if data.data:
            return OutcomeRecord.model_validate(data.data[0])
        return None

    def list_by_session(self, session_id: str) -> list[OutcomeRecord]:
        """All outcomes for a session, ordered by nonce."""
        data = (
            self.table
            .select("*")
            .eq("session_id", session_id)
            .order("nonce")
            .execute()
        )
        return [OutcomeRecord.model_validate(row) for row in data.data]
