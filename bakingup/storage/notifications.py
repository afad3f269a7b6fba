"""Notifications shown to a user."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


@dataclass
class CreateNotificationItem:
    """The content of a new notification."""

    user_id: str
    eng_title: str = ""
    thai_title: str = ""
    eng_message: str = ""
    thai_message: str = ""
    is_read: bool = False
    noti_type: str = ""
    item_id: str = ""
    item_name: str = ""
    noti_item_type: str = ""


def _to_dict(row: sqlite3.Row) -> dict[str, Any]:
    item = dict(row)
    item["is_read"] = bool(item["is_read"])
    return item


class NotificationRepository:
    """Reads and writes notifications."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def get_all_notifications(self, user_id: str) -> list[dict[str, Any]]:
        """The user's notifications, newest first."""
        rows = self.conn.execute(
            "SELECT * FROM notifications WHERE user_id = ? ORDER BY created_at DESC", (user_id,)
        )
        return [_to_dict(row) for row in rows]

    def create_notification(self, item: CreateNotificationItem) -> str:
        """Store a notification and return its new id."""
        noti_id = str(uuid.uuid4())
        with self.conn:
            self.conn.execute(
                "INSERT INTO notifications (noti_id, user_id, eng_title, thai_title, eng_message,"
                " thai_message, created_at, is_read, noti_type, item_id, item_name, noti_item_type)"
                " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    noti_id,
                    item.user_id,
                    item.eng_title,
                    item.thai_title,
                    item.eng_message,
                    item.thai_message,
                    datetime.now(timezone.utc).isoformat(),
                    int(item.is_read),
                    item.noti_type,
                    item.item_id,
                    item.item_name,
                    item.noti_item_type,
                ),
            )
        return noti_id

    def delete_notification(self, noti_id: str) -> None:
        with self.conn:
            cursor = self.conn.execute("DELETE FROM notifications WHERE noti_id = ?", (noti_id,))
        if cursor.rowcount == 0:
            raise LookupError(f"notification {noti_id!r} not found")

    def read_notification(self, noti_id: str) -> None:
        with self.conn:
            cursor = self.conn.execute(
                "UPDATE notifications SET is_read = 1 WHERE noti_id = ?", (noti_id,)
            )
        if cursor.rowcount == 0:
            raise LookupError(f"notification {noti_id!r} not found")

    def read_all_notifications(self, user_id: str) -> None:
        with self.conn:
            self.conn.execute(
                "UPDATE notifications SET is_read = 1 WHERE user_id = ? AND is_read = 0",
                (user_id,),
            )