"""Persistence for the calculator state blob."""

import logging
import sqlite3

import simplejson as json

from withholding.engines.brackets import STORAGE_KEY
from withholding.exceptions import BracketFormatError, StateNotFoundError
from withholding.models.state import CalculatorState

logger = logging.getLogger(__name__)


class StateRepository:
    """Reads and writes the whole calculator state under one fixed key."""

    def __init__(self, conn: sqlite3.Connection, key: str = STORAGE_KEY):
        self.conn = conn
        self.key = key

    def load_raw(self) -> str | None:
        cursor = self.conn.execute(
            "SELECT value FROM app_state WHERE key = ?", (self.key,)
        )
        row = cursor.fetchone()
        return row[0] if row else None

    def load(self) -> CalculatorState | None:
        """Return the stored state, or None if nothing usable is stored.

        A blob that no longer deserialises is logged and treated as absent.
        """
        raw = self.load_raw()
        if raw is None:
            return None
        try:
            return CalculatorState.from_dict(json.loads(raw, use_decimal=True, allow_nan=True))
        except (ValueError, TypeError, AttributeError, BracketFormatError) as exc:
            logger.warning("Error reading stored state %r: %s", self.key, exc)
            return None

    def require(self) -> CalculatorState:
        """Return the stored state.

        Raises:
            StateNotFoundError: nothing usable is stored under the key.
        """
        state = self.load()
        if state is None:
            raise StateNotFoundError(self.location)
        return state

    @property
    def location(self) -> str:
        row = self.conn.execute("PRAGMA database_list").fetchone()
        return row[2] if row and row[2] else ":memory:"

    def save(self, state: CalculatorState) -> None:
        value = json.dumps(state.to_dict(), use_decimal=True)
        self.conn.execute(
            """INSERT INTO app_state (key, value, updated_at)
               VALUES (?, ?, datetime('now'))
               ON CONFLICT(key) DO UPDATE SET
                   value = excluded.value,
                   updated_at = excluded.updated_at""",
            (self.key, value),
        )
        self.conn.commit()
