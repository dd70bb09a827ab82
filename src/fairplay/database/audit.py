"""
FairPlay - Bet Audit

Loads a logged bet and its revealed session from Supabase and replays it.
"""

import logging

from supabase import Client

from fairplay.database.outcomes import OutcomeLog
from fairplay.database.sessions import SeedSessionStore
from fairplay.engine.base import VerificationReport
from fairplay.engine.errors import FairPlayError
from fairplay.engine.service import FairPlayEngine, get_engine

logger = logging.getLogger(__name__)


def audit_bet(
    client: Client,
    session_id: str,
    nonce: int,
    engine: FairPlayEngine | None = None,
    *,
    strict: bool = False,
) -> VerificationReport:
    """Verify a logged bet against its session's revealed server seed.

    Raises:
        LookupError: If the session or the outcome is not stored
        FairPlayError: If the session's seed has not been revealed yet
    """
    engine = engine or get_engine()

    session = SeedSessionStore(client).get(session_id)
    if session is None:
        raise LookupError(f"Session {session_id} not found.")
    if session.is_active or not session.is_revealed:
        raise FairPlayError(
            f"Session {session_id} is still active; rotate seeds before auditing."
        )

    record = OutcomeLog(client).get(session_id, nonce)
    if record is None:
        raise LookupError(f"No outcome logged for session {session_id} nonce {nonce}.")

    report = engine.verify(
        session.server_seed,
        session.client_seed,
        record.nonce,
        record.game,
        record.to_params(),
        record.to_outcome(),
        server_seed_hash=session.server_seed_hash,
        strict=strict,
    )
    logger.info(
        "Audited session %s nonce %s: %s",
        session_id,
        nonce,
        "match" if report.match else "MISMATCH",
    )
    return report
