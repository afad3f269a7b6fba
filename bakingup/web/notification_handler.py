"""HTTP handlers for notifications."""

from __future__ import annotations

from typing import Any

from flask import jsonify, request

from bakingup.storage.notifications import CreateNotificationItem
from bakingup.web.response import Response, error, success, success_message

_TEXT_FIELDS = (
    "user_id",
    "eng_title",
    "thai_title",
    "eng_message",
    "thai_message",
    "noti_type",
    "item_id",
    "item_name",
    "noti_item_type",
)


def _send(rsp: Response):
    return jsonify(rsp.to_dict())


def _parse_item(data: Any) -> CreateNotificationItem:
    if not isinstance(data, dict):
        raise ValueError("request body is not a JSON object")
    values: dict[str, Any] = {}
    for key in _TEXT_FIELDS:
        value = data.get(key)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise ValueError(f"{key} must be a string")
        values[key] = value
    is_read = data.get("is_read")
    if is_read is None:
        is_read = False
    if not isinstance(is_read, bool):
        raise ValueError("is_read must be a boolean")
    return CreateNotificationItem(is_read=is_read, **values)


class NotificationHandler:
    """Notification endpoints; each method serves the current Flask request."""

    def __init__(self, service: Any) -> None:
        self.service = service

    def get_all_notifications(self):
        try:
            notifications = self.service.get_all_notifications(request.args.get("user_id", ""))
        except Exception as exc:
            return _send(error(400, "Cannot get all notifications of the user.", str(exc)))
        return _send(success(notifications))

    def create_notification(self):
        try:
            item = _parse_item(request.get_json(silent=True))
        except ValueError as exc:
            return _send(error(400, "Failed to parse request body", str(exc)))
        if not item.user_id:
            return _send(error(400, "UserID is required", ""))
        try:
            self.service.create_notification(item)
        except Exception as exc:
            return _send(error(400, "Cannot add a new notification.", str(exc)))
        return _send(success_message("Successfully add a new notification."))

    def delete_notification(self):
        try:
            self.service.delete_notification(request.args.get("noti_id", ""))
        except Exception as exc:
            return _send(error(400, "Cannot delete a notification.", str(exc)))
        return _send(success_message("Successfully delete a notification."))

    def read_notification(self):
        try:
            self.service.read_notification(request.args.get("noti_id", ""))
        except Exception as exc:
            return _send(
                error(400, "Cannot update the read status of the notification.", str(exc))
            )
        return _send(success_message("Successfully update the read status of the notification."))

    def read_all_notifications(self):
        try:
            self.service.read_all_notifications(request.args.get("user_id", ""))
        except Exception as exc:
            return _send(
                error(400, "Cannot update the read status of all the notifications.", str(exc))
            )
        return _send(
            success_message("Successfully update the read status of all the notifications.")
        )