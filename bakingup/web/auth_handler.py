"""HTTP handlers for registration and device tokens."""

from __future__ import annotations

import dataclasses
from typing import Any

from flask import jsonify, request

from bakingup.storage.users import DeviceTokenRequest, ManageUserRequest

_INVALID_BODY = {"status": 400, "message": "Invalid request body."}


def _json_object() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("request body is not a JSON object")
    return data


def _text(data: dict[str, Any], key: str) -> str:
    value = data.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _body(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


class AuthHandler:
    """Registration and device-token endpoints.

    The user service returns the response body; when it raises, the handler
    answers 400 with the error text as message.
    """

    def __init__(self, user_service: Any) -> None:
        self.user_service = user_service

    def _handle(self, parse, action, ok_status: int):
        try:
            req = parse(_json_object())
        except ValueError:
            return jsonify(_INVALID_BODY), 400
        try:
            result = action(req)
        except Exception as exc:
            return jsonify({"status": 400, "message": str(exc)}), 400
        return jsonify(_body(result)), ok_status

    @staticmethod
    def _user(data: dict[str, Any]) -> ManageUserRequest:
        return ManageUserRequest(
            user_id=_text(data, "user_id"),
            first_name=_text(data, "first_name"),
            last_name=_text(data, "last_name"),
            tel=_text(data, "tel"),
            store_name=_text(data, "store_name"),
        )

    @staticmethod
    def _device(data: dict[str, Any]) -> DeviceTokenRequest:
        return DeviceTokenRequest(
            user_id=_text(data, "user_id"), device_token=_text(data, "device_token")
        )

    def register(self):
        return self._handle(self._user, self.user_service.register_user, 201)

    def add_device_token(self):
        return self._handle(self._device, self.user_service.add_device_token, 201)

    def delete_device_token(self):
        return self._handle(self._device, self.user_service.delete_device_token, 200)

    def delete_all_except_device_token(self):
        return self._handle(
            self._device, self.user_service.delete_all_except_device_token, 200
        )