"""Users, their devices and their production queue."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass
class ManageUserRequest:
    """Fields used to create or edit a user."""

    user_id: str
    first_name: str = ""
    last_name: str = ""
    tel: str = ""
    store_name: str = ""


@dataclass
class DeviceTokenRequest:
    """A device token that belongs to a user."""

    user_id: str
    device_token: str


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


class UserRepository:
    """Reads and writes users and their devices."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def create_user(self, user: ManageUserRequest) -> None:
        """Insert a new user with the default expiration colours and English."""
        with self.conn:
            self.conn.execute(
                "INSERT INTO users (user_id, first_name, last_name, telephone, store_name,"
                " black_expiration_date, red_expiration_date, yellow_expiration_date, language)"
                " VALUES (?, ?, ?, ?, ?, ?, ?, ?, 'EN')",
                (
                    user.user_id,
                    user.first_name,
                    user.last_name,
                    user.tel,
                    user.store_name,
                    datetime(2000, 1, 1, tzinfo=timezone.utc).isoformat(),
                    datetime(2000, 1, 6, tzinfo=timezone.utc).isoformat(),
                    datetime(2000, 1, 11, tzinfo=timezone.utc).isoformat(),
                ),
            )

    def get_all_users(self) -> list[dict[str, Any]]:
        return [dict(row) for row in self.conn.execute("SELECT * FROM users")]

    def get_user(self, user_id: str) -> dict[str, Any]:
        """Return the user; raise LookupError when there is none."""
        row = self.conn.execute("SELECT * FROM users WHERE user_id = ?", (user_id,)).fetchone()
        if row is None:
            raise LookupError(f"user {user_id!r} not found")
        return dict(row)

    def get_device_token(self, user_id: str) -> str:
        """Return the first device token of the user."""
        row = self.conn.execute(
            "SELECT device_token FROM devices WHERE user_id = ? LIMIT 1", (user_id,)
        ).fetchone()
        if row is None:
            raise LookupError(f"no device for user {user_id!r}")
        return row["device_token"]

    def add_device_token(self, req: DeviceTokenRequest) -> None:
        with self.conn:
            self.conn.execute(
                "INSERT INTO devices (device_token, user_id) VALUES (?, ?)",
                (req.device_token, req.user_id),
            )

    def delete_device_token(self, req: DeviceTokenRequest) -> None:
        with self.conn:
            self.conn.execute(
                "DELETE FROM devices WHERE device_token = ? AND user_id = ?",
                (req.device_token, req.user_id),
            )

    def delete_all_except_device_token(self, req: DeviceTokenRequest) -> None:
        """Remove every device of the user except the given one."""
        with self.conn:
            self.conn.execute(
                "DELETE FROM devices WHERE user_id = ? AND device_token != ?",
                (req.user_id, req.device_token),
            )

    def get_user_production_queue(self, user_id: str) -> list[dict[str, Any]]:
        """Pre-orders picked up in the future, each with its queued recipes."""
        now = datetime.now(timezone.utc)
        orders = []
        rows = self.conn.execute(
            "SELECT * FROM orders WHERE user_id = ? AND is_pre_order = 1", (user_id,)
        )
        for row in rows.fetchall():
            pick_up = _parse_time(row["pick_up_date_time"])
            if pick_up is None or pick_up <= now:
                continue
            order = dict(row)
            order["production_queue"] = [
                self._queue_entry(entry)
                for entry in self.conn.execute(
                    "SELECT * FROM production_queue WHERE order_id = ?", (row["order_id"],)
                ).fetchall()
            ]
            orders.append(order)
        return orders

    def _queue_entry(self, entry: sqlite3.Row) -> dict[str, Any]:
        item = dict(entry)
        recipe = self.conn.execute(
            "SELECT * FROM recipes WHERE recipe_id = ?", (entry["recipe_id"],)
        ).fetchone()
        if recipe is not None:
            recipe_dict = dict(recipe)
            recipe_dict["recipe_images"] = [
                dict(image)
                for image in self.conn.execute(
                    "SELECT * FROM recipe_images WHERE recipe_id = ? ORDER BY image_index",
                    (entry["recipe_id"],),
                )
            ]
            item["recipe"] = recipe_dict
        else:
            item["recipe"] = None
        return item

    def edit_user_info(self, user: ManageUserRequest) -> None:
        """Update name, telephone and store name; raise LookupError if absent."""
        with self.conn:
            cursor = self.conn.execute(
                "UPDATE users SET first_name = ?, last_name = ?, telephone = ?, store_name = ?"
                " WHERE user_id = ?",
                (user.first_name, user.last_name, user.tel, user.store_name, user.user_id),
            )
        if cursor.rowcount == 0:
            raise LookupError(f"user {user.user_id!r} not found")