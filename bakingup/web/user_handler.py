"""HTTP handlers for user information."""

from __future__ import annotations

from typing import Any

from flask import jsonify, request

from bakingup.storage.users import ManageUserRequest
from bakingup.web.response import Response, error, success, success_message


def _send(rsp: Response):
    return jsonify(rsp.to_dict())


def _parse_user(data: Any) -> ManageUserRequest:
    if not isinstance(data, dict):
        raise ValueError("request body is not a JSON object")
    values = {}
    for key in ("user_id", "first_name", "last_name", "tel", "store_name"):
        value = data.get(key, "")
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise ValueError(f"{key} must be a string")
        values[key] = value
    return ManageUserRequest(**values)


class UserHandler:
    """User endpoints; each method serves the current Flask request."""

    def __init__(self, service: Any) -> None:
        self.service = service

    def get_user_info(self):
        try:
            info = self.service.get_user_info(request.args.get("user_id", ""))
        except Exception as exc:
            return _send(error(400, "Cannot get the user information", str(exc)))
        return _send(success(info))

    def edit_user_info(self):
        try:
            user = _parse_user(request.get_json(silent=True))
        except ValueError as exc:
            return _send(error(400, "Failed to parse request body", str(exc)))
        if not user.user_id:
            return _send(error(400, "UserID is required", ""))
        try:
            self.service.edit_user_info(user)
        except Exception as exc:
            return _send(error(400, "Cannot edit the user information", str(exc)))
        return _send(success_message("Successfully edit the user information."))