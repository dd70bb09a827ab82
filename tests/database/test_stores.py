"""Tests for the Supabase stores: SeedSessionStore, OutcomeLog and the client factory."""

from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest

from fairplay.database.client import get_supabase_client
from fairplay.database.models import OutcomeRecord, SeedSessionRecord
from fairplay.database.outcomes import OutcomeLog
from fairplay.database.sessions import SeedSessionStore
from fairplay.engine.base import DiceParams, GameType, LimboParams, MinesweeperParams


@pytest.fixture
def session_row(session):
    return {
        "id": session.session_id,
        "server_seed": session.server_seed,
        "server_seed_hash": session.server_seed_hash,
        "client_seed": session.client_seed,
        "nonce": session.nonce,
        "is_active": True,
        "created_at": "2026-01-01T00:00:00+00:00",
        "revealed_at": None,
    }


class TestSeedSessionStore:
    def test_uses_seed_sessions_table(self, mock_client):
        SeedSessionStore(mock_client)
        mock_client.table.assert_called_once_with("seed_sessions")

    def test_save_inserts_commitment(self, mock_client, mock_table, session, session_row):
        mock_table.insert.return_value.execute.return_value.data = [session_row]

        record = SeedSessionStore(mock_client).save(session)

        payload = mock_table.insert.call_args.args[0]
        assert payload["id"] == session.session_id
        assert payload["server_seed_hash"] == session.server_seed_hash
        assert payload["nonce"] == 0
        assert isinstance(record, SeedSessionRecord)
        assert record.client_seed == session.client_seed

    def test_get_found(self, mock_client, mock_table, session_row):
        mock_table.select.return_value.eq.return_value.execute.return_value.data = [session_row]

        record = SeedSessionStore(mock_client).get("session-1")

        mock_table.select.return_value.eq.assert_called_once_with("id", "session-1")
        assert record.id == "session-1"

    def test_get_missing(self, mock_client, mock_table):
        mock_table.select.return_value.eq.return_value.execute.return_value.data = []
        assert SeedSessionStore(mock_client).get("nope") is None

    def test_load_rebuilds_session(self, mock_client, mock_table, session_row, session):
        session_row["nonce"] = 17
        mock_table.select.return_value.eq.return_value.execute.return_value.data = [session_row]

        loaded = SeedSessionStore(mock_client).load("session-1")

        assert loaded.nonce == 17
        assert loaded.server_seed_hash == session.server_seed_hash
        assert loaded.session_id == "session-1"
        assert loaded.is_active

    def test_update_nonce(self, mock_client, mock_table, session_row):
        session_row["nonce"] = 4
        chain = mock_table.update.return_value.eq.return_value.eq.return_value
        chain.execute.return_value.data = [session_row]

        record = SeedSessionStore(mock_client).update_nonce("session-1", 4)

        mock_table.update.assert_called_once_with({"nonce": 4})
        assert record.nonce == 4

    def test_update_nonce_on_closed_session_raises(self, mock_client, mock_table):
        chain = mock_table.update.return_value.eq.return_value.eq.return_value
        chain.execute.return_value.data = []
        with pytest.raises(LookupError):
            SeedSessionStore(mock_client).update_nonce("session-1", 4)

    def test_reveal(self, mock_client, mock_table, session_row):
        session_row.update(is_active=False, revealed_at="2026-01-02T00:00:00+00:00")
        mock_table.update.return_value.eq.return_value.execute.return_value.data = [session_row]

        record = SeedSessionStore(mock_client).reveal("session-1")

        payload = mock_table.update.call_args.args[0]
        assert payload["is_active"] is False
        assert "revealed_at" in payload
        assert record.is_revealed

    def test_list_revealed(self, mock_client, mock_table, session_row):
        session_row.update(is_active=False, revealed_at="2026-01-02T00:00:00+00:00")
        older = dict(session_row, id="session-0", created_at="2025-12-31T00:00:00+00:00")
        filtered = mock_table.select.return_value.eq.return_value
        chain = filtered.eq.return_value.order.return_value
        chain.execute.return_value.data = [session_row, older]

        records = SeedSessionStore(mock_client).list_revealed(session_row["client_seed"])

        mock_table.select.assert_called_once_with("*")
        filtered.eq.assert_called_once_with("is_active", False)
        mock_table.select.return_value.eq.assert_called_once_with(
            "client_seed", session_row["client_seed"]
        )
        filtered.eq.return_value.order.assert_called_once_with("created_at", desc=True)
        assert [r.id for r in records] == ["session-1", "session-0"]
        assert all(r.is_revealed for r in records)
        assert records[0].to_public_dict()["server_seed"] == session_row["server_seed"]

    def test_list_revealed_empty(self, mock_client, mock_table):
        chain = mock_table.select.return_value.eq.return_value.eq.return_value.order.return_value
        chain.execute.return_value.data = []
        assert SeedSessionStore(mock_client).list_revealed("nobody") == []

    def test_save_rotation(self, mock_client, engine, session):
        store = SeedSessionStore(mock_client)
        rotation = engine.rotate_seeds(session)
        with patch.object(store, "reveal") as reveal, patch.object(store, "save") as save:
            store.save_rotation(rotation)
        reveal.assert_called_once_with(session.session_id)
        save.assert_called_once_with(rotation.new_session)


class TestSeedSessionRecord:
    def test_public_dict_hides_seed_until_revealed(self, session_row):
        record = SeedSessionRecord.model_validate(session_row)
        assert "server_seed" not in record.to_public_dict()

        session_row["revealed_at"] = "2026-01-02T00:00:00+00:00"
        session_row["is_active"] = False
        revealed = SeedSessionRecord.model_validate(session_row)
        assert revealed.to_public_dict()["server_seed"] == session_row["server_seed"]

    def test_rejects_short_hash(self, session_row):
        session_row["server_seed_hash"] = "abc"
        with pytest.raises(ValueError):
            SeedSessionRecord.model_validate(session_row)


class TestOutcomeLog:
    def test_uses_bet_outcomes_table(self, mock_client):
        OutcomeLog(mock_client)
        mock_client.table.assert_called_once_with("bet_outcomes")

    def test_record(self, mock_client, mock_table, engine, session):
        params = DiceParams(target=50)
        resolution = engine.resolve(session, GameType.DICE, params, bet_amount="2")
        row = {
            "id": 1,
            "session_id": session.session_id,
            "game": "dice",
            "nonce": 0,
            "bet_amount": "2",
            "params": params.to_dict(),
            "outcome": resolution.outcome.to_dict(),
            "payout_multiplier": str(resolution.payout_multiplier),
            "result_hash": resolution.result_hash,
        }
        mock_table.insert.return_value.execute.return_value.data = [row]

        record = OutcomeLog(mock_client).record(session.session_id, resolution, params)

        payload = mock_table.insert.call_args.args[0]
        assert payload["game"] == "dice"
        assert payload["nonce"] == 0
        assert payload["result_hash"] == resolution.result_hash
        assert payload["params"] == {"target": "50", "direction": "under"}
        assert record.to_outcome() == resolution.outcome
        assert record.to_params() == params

    def test_record_open_minesweeper_round(self, mock_client, mock_table, engine, session):
        params = MinesweeperParams()
        resolution = engine.resolve(session, GameType.MINESWEEPER, params)
        mock_table.insert.return_value.execute.return_value.data = [{
            "session_id": session.session_id,
            "game": "minesweeper",
            "nonce": 0,
            "bet_amount": "1",
            "params": params.to_dict(),
            "outcome": resolution.outcome.to_dict(),
            "payout_multiplier": None,
            "result_hash": resolution.result_hash,
        }]

        record = OutcomeLog(mock_client).record(session.session_id, resolution, params)

        assert mock_table.insert.call_args.args[0]["payout_multiplier"] is None
        assert record.payout_multiplier is None

    def test_get(self, mock_client, mock_table):
        chain = mock_table.select.return_value.eq.return_value.eq.return_value
        chain.execute.return_value.data = []
        assert OutcomeLog(mock_client).get("session-1", 3) is None
        mock_table.select.return_value.eq.assert_called_once_with("session_id", "session-1")
        mock_table.select.return_value.eq.return_value.eq.assert_called_once_with("nonce", 3)

    def test_list_by_session(self, mock_client, mock_table, engine, session):
        params = LimboParams(target=2)
        rows = []
        for _ in range(2):
            resolution = engine.resolve(session, GameType.LIMBO, params)
            rows.append({
                "session_id": session.session_id,
                "game": "limbo",
                "nonce": resolution.outcome.nonce,
                "bet_amount": "1",
                "params": params.to_dict(),
                "outcome": resolution.outcome.to_dict(),
                "payout_multiplier": str(resolution.payout_multiplier),
                "result_hash": resolution.result_hash,
            })
        chain = mock_table.select.return_value.eq.return_value.order.return_value
        chain.execute.return_value.data = rows

        records = OutcomeLog(mock_client).list_by_session(session.session_id)

        mock_table.select.return_value.eq.return_value.order.assert_called_once_with("nonce")
        assert [r.nonce for r in records] == [0, 1]
        assert all(isinstance(r, OutcomeRecord) for r in records)
        assert records[1].payout_multiplier in (Decimal("0"), Decimal("2"))


class TestSupabaseClient:
    def setup_method(self):
        get_supabase_client.cache_clear()

    def teardown_method(self):
        get_supabase_client.cache_clear()

    @patch("fairplay.database.client.get_settings")
    def test_missing_credentials_raise(self, mock_settings):
        mock_settings.return_value = MagicMock(supabase_url=None, supabase_anon_key=None)
        with pytest.raises(RuntimeError, match="SUPABASE_URL"):
            get_supabase_client()

    @patch("fairplay.database.client.create_client")
    @patch("fairplay.database.client.get_settings")
    def test_creates_and_caches_client(self, mock_settings, mock_create):
        mock_settings.return_value = MagicMock(
            supabase_url="https://example.supabase.co", supabase_anon_key="key"
        )
        first = get_supabase_client()
        second = get_supabase_client()
        assert first is second
        mock_create.assert_called_once_with("https://example.supabase.co", "key")
