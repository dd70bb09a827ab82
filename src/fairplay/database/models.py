"""
FairPlay - Database Models

Pydantic models that mirror the Supabase table schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from fairplay.engine.base import BetParams, GameType, ResolvedOutcome, params_from_dict
from fairplay.engine.session import SeedSession


class SeedSessionRecord(BaseModel):
    """Mirrors the `seed_sessions` table."""

    id: str
    server_seed: str
    server_seed_hash: str = Field(min_length=64, max_length=64)
    client_seed: str = Field(min_length=1)
    nonce: int = Field(default=0, ge=0)
    is_active: bool = True
    created_at: datetime
    revealed_at: datetime | None = None

    model_config = {"from_attributes": True}

    @property
    def is_revealed(self) -> bool:
        return self.revealed_at is not None

    def to_session(self) -> SeedSession:
        """Rebuild the live session (nonce included) from its row."""
        return SeedSession(
            self.server_seed,
            self.client_seed,
            nonce=self.nonce,
            session_id=self.id,
            created_at=self.created_at.timestamp(),
            is_active=self.is_active,
        )

    def to_public_dict(self) -> dict[str, Any]:
        """Row as a player may see it; the seed appears only once revealed."""
        data = self.model_dump(mode="json", exclude={"server_seed"})
        if self.is_revealed:
            data["server_seed"] = self.server_seed
        return data


class OutcomeRecord(BaseModel):
    """Mirrors the `bet_outcomes` table."""

    id: int | None = None
    session_id: str
    game: GameType
    nonce: int = Field(ge=0)
    bet_amount: Decimal
    params: dict[str, Any]
    outcome: dict[str, Any]
    payout_multiplier: Decimal | None = None
    result_hash: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}

    def to_outcome(self) -> ResolvedOutcome:
        return ResolvedOutcome.from_dict(self.outcome)

    def to_params(self) -> BetParams:
        return params_from_dict(self.game, self.params)
