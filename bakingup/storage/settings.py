"""Per-user settings: language, fixed costs and expiration colours."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any


@dataclass
class ChangeUserLanguage:
    user_id: str
    language: str


@dataclass
class ChangeFixCostSetting:
    fix_cost_id: str
    rent: float = 0.0
    salaries: float = 0.0
    insurance: float = 0.0
    subscriptions: float = 0.0
    advertising: float = 0.0
    electricity: float = 0.0
    water: float = 0.0
    gas: float = 0.0
    other: float = 0.0
    note: str = ""


@dataclass
class ChangeExpirationDateSetting:
    """Day counts after which stock is shown black, red or yellow."""

    user_id: str
    black_expiration_date: int = 0
    red_expiration_date: int = 0
    yellow_expiration_date: int = 0


_COST_FIELDS = (
    "rent",
    "salaries",
    "insurance",
    "subscriptions",
    "advertising",
    "electricity",
    "water",
    "gas",
    "other",
)


def _empty_fix_cost() -> dict[str, Any]:
    empty: dict[str, Any] = {"fix_cost_id": "", "user_id": "", "note": "", "created_at": None}
    empty.update({name: 0.0 for name in _COST_FIELDS})
    return empty


def _as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def _day_offset(days: int) -> str:
    return (datetime(2000, 1, 1, tzinfo=timezone.utc) + timedelta(days=days)).isoformat()


class SettingsRepository:
    """Reads and writes user settings."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def _user(self, user_id: str) -> dict[str, Any]:
        row = self.conn.execute("SELECT * FROM users WHERE user_id = ?", (user_id,)).fetchone()
        if row is None:
            raise LookupError(f"user {user_id!r} not found")
        return dict(row)

    def delete_account(self, user_id: str) -> None:
        with self.conn:
            cursor = self.conn.execute("DELETE FROM users WHERE user_id = ?", (user_id,))
        if cursor.rowcount == 0:
            raise LookupError(f"user {user_id!r} not found")

    def get_language(self, user_id: str) -> dict[str, Any]:
        return self._user(user_id)

    def change_language(self, user_language: ChangeUserLanguage) -> None:
        """Store EN for "English" and TH for anything else."""
        code = "EN" if user_language.language == "English" else "TH"
        with self.conn:
            cursor = self.conn.execute(
                "UPDATE users SET language = ? WHERE user_id = ?", (code, user_language.user_id)
            )
        if cursor.rowcount == 0:
            raise LookupError(f"user {user_language.user_id!r} not found")

    def get_fix_cost(
        self, user_id: str, start_date_time: datetime, end_date_time: datetime
    ) -> list[dict[str, Any]]:
        """Fixed costs created within the range, or one empty entry when none."""
        start, end = _as_utc(start_date_time), _as_utc(end_date_time)
        costs = [
            dict(row)
            for row in self.conn.execute("SELECT * FROM fix_cost WHERE user_id = ?", (user_id,))
            if start <= _as_utc(datetime.fromisoformat(row["created_at"])) <= end
        ]
        return costs or [_empty_fix_cost()]

    def change_fix_cost(self, fix_cost: ChangeFixCostSetting) -> None:
        assignments = ", ".join(f"{name} = ?" for name in (*_COST_FIELDS, "note"))
        values = [getattr(fix_cost, name) for name in (*_COST_FIELDS, "note")]
        with self.conn:
            cursor = self.conn.execute(
                f"UPDATE fix_cost SET {assignments} WHERE fix_cost_id = ?",
                (*values, fix_cost.fix_cost_id),
            )
        if cursor.rowcount == 0:
            raise LookupError(f"fix cost {fix_cost.fix_cost_id!r} not found")

    def get_color_expired(self, user_id: str) -> dict[str, Any]:
        return self._user(user_id)

    def change_color_expired(self, setting: ChangeExpirationDateSetting) -> None:
        """Store each day count as that many days after 2000-01-01.

        A missing user is ignored.
        """
        with self.conn:
            self.conn.execute(
                "UPDATE users SET black_expiration_date = ?, red_expiration_date = ?,"
                " yellow_expiration_date = ? WHERE user_id = ?",
                (
                    _day_offset(setting.black_expiration_date),
                    _day_offset(setting.red_expiration_date),
                    _day_offset(setting.yellow_expiration_date),
                    setting.user_id,
                ),
            )