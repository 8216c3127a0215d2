"""Tests for the calculator state repository."""

import logging
from decimal import Decimal

import pytest

from withholding.db.repository import StateRepository
from withholding.db.schema import SCHEMA_VERSION, create_schema
from withholding.engines.brackets import STORAGE_KEY
from withholding.exceptions import StateNotFoundError
from withholding.models.brackets import make_table
from withholding.models.enums import FilingStatus
from withholding.models.inputs import Job
from withholding.models.state import CalculatorState


@pytest.fixture
def conn(tmp_path):
    return create_schema(tmp_path / "state.db")


@pytest.fixture
def repo(conn):
    return StateRepository(conn)


def _store_raw(conn, value):
    conn.execute(
        "INSERT INTO app_state (key, value) VALUES (?, ?)", (STORAGE_KEY, value)
    )
    conn.commit()


class TestSchema:
    def test_version_recorded(self, conn):
        row = conn.execute("SELECT version FROM schema_version").fetchone()
        assert row[0] == SCHEMA_VERSION

    def test_idempotent(self, tmp_path):
        create_schema(tmp_path / "state.db")
        conn = create_schema(tmp_path / "state.db")
        assert conn.execute("SELECT COUNT(*) FROM schema_version").fetchone()[0] == 1


class TestStateRepository:
    def test_load_empty(self, repo):
        assert repo.load() is None
        assert repo.load_raw() is None

    def test_save_and_load(self, repo, your_jobs, spouse_jobs):
        state = CalculatorState.initial()
        state.you = your_jobs
        state.spouse = spouse_jobs
        state.state_brackets[FilingStatus.MFJ] = make_table([("1234.56", "0.015"), (None, "0.2")])
        repo.save(state)

        loaded = repo.load()
        assert loaded == state
        assert loaded.you[0].gross == Decimal("120000")

    def test_save_overwrites(self, repo, conn):
        state = CalculatorState.initial()
        repo.save(state)
        state.you.append(Job(id="extra", gross=Decimal("1000")))
        repo.save(state)

        assert conn.execute("SELECT COUNT(*) FROM app_state").fetchone()[0] == 1
        assert [job.id for job in repo.load().you][-1] == "extra"

    def test_custom_key(self, conn):
        StateRepository(conn, key="other").save(CalculatorState.initial())
        assert StateRepository(conn).load() is None
        assert StateRepository(conn, key="other").load() is not None

    @pytest.mark.parametrize(
        "value",
        [
            "not json",
            "[]",
            '{"federal_brackets": {"BOGUS": []}}',
            '{"state_brackets": {"SINGLE": {"upTo": 1}}}',
            '{"settings": {"mode": "sideways"}}',
        ],
    )
    def test_corrupt_blob_treated_as_absent(self, repo, conn, caplog, value):
        _store_raw(conn, value)
        with caplog.at_level(logging.WARNING, logger="withholding.db.repository"):
            assert repo.load() is None
        assert "Error reading stored state" in caplog.text
        assert repo.load_raw() == value

    def test_save_replaces_corrupt_blob(self, repo, conn):
        _store_raw(conn, "not json")
        state = CalculatorState.initial()
        repo.save(state)
        assert repo.load() == state

    def test_require_missing(self, repo):
        with pytest.raises(StateNotFoundError, match="No calculator state found in") as exc_info:
            repo.require()
        assert exc_info.value.location.endswith("state.db")

    def test_require_corrupt(self, repo, conn):
        _store_raw(conn, "not json")
        with pytest.raises(StateNotFoundError):
            repo.require()

    def test_require_returns_state(self, repo):
        state = CalculatorState.initial()
        repo.save(state)
        assert repo.require() == state

    def test_bracket_precision_survives_storage(self, repo):
        state = CalculatorState.initial()
        state.federal_brackets[FilingStatus.MFJ] = make_table(
            [("1000.123456789012345678", "0.12345678901234567890"), (None, "0.37")]
        )
        repo.save(state)
        loaded = repo.load()
        assert loaded.federal_brackets[FilingStatus.MFJ] == state.federal_brackets[FilingStatus.MFJ]
