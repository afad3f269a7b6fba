"""HTTP handlers for user settings."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from flask import jsonify, request

from bakingup.storage.settings import (
    ChangeExpirationDateSetting,
    ChangeFixCostSetting,
    ChangeUserLanguage,
)
from bakingup.web.response import Response, error, success, success_message

_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$", re.IGNORECASE
)


def _parse_rfc3339(text: str) -> datetime:
    if not _RFC3339.match(text):
        raise ValueError(f"cannot parse {text!r} as RFC 3339")
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _send(rsp: Response):
    return jsonify(rsp.to_dict())


def _body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("request body is not a JSON object")
    return data


class SettingsHandler:
    """Settings endpoints; each method serves the current Flask request."""

    def __init__(self, service: Any) -> None:
        self.service = service

    def delete_account(self):
        try:
            self.service.delete_account(request.args.get("user_id", ""))
        except Exception as exc:
            return _send(error(400, "Cannot delete an account", str(exc)))
        return _send(success_message("Successfully delete an account"))

    def get_language(self):
        try:
            language = self.service.get_language(request.args.get("user_id", ""))
        except Exception as exc:
            return _send(error(400, "Cannot get the language", str(exc)))
        return _send(success(language))

    def change_language(self):
        try:
            body = _body()
            setting = ChangeUserLanguage(
                user_id=str(body.get("user_id", "")), language=str(body.get("language", ""))
            )
        except (ValueError, TypeError) as exc:
            return _send(error(400, "Failed to parse request body", str(exc)))
        if not setting.user_id:
            return _send(error(400, "UserID is required", ""))
        try:
            self.service.change_language(setting)
        except Exception as exc:
            return _send(error(400, "Cannot change the language", str(exc)))
        return _send(success_message("Successfully change the language."))

    def get_fix_cost(self):
        user_id = request.args.get("user_id", "")
        try:
            created_at = _parse_rfc3339(request.args.get("created_at", ""))
        except ValueError as exc:
            return _send(error(400, "Invalid date format for created_at", str(exc)))
        try:
            fix_cost = self.service.get_fix_cost(user_id, created_at)
        except Exception:
            # The success body written afterwards replaces the error body.
            fix_cost = None
        return _send(success(fix_cost))

    def change_fix_cost(self):
        try:
            body = _body()
            setting = ChangeFixCostSetting(
                fix_cost_id=str(body.get("fix_cost_id", "")),
                rent=float(body.get("rent", 0)),
                salaries=float(body.get("salaries", 0)),
                insurance=float(body.get("insurance", 0)),
                subscriptions=float(body.get("subscriptions", 0)),
                advertising=float(body.get("advertising", 0)),
                electricity=float(body.get("electricity", 0)),
                water=float(body.get("water", 0)),
                gas=float(body.get("gas", 0)),
                other=float(body.get("other", 0)),
                note=str(body.get("note", "")),
            )
        except (ValueError, TypeError) as exc:
            return _send(error(400, "Failed to parse request body", str(exc)))
        try:
            self.service.change_fix_cost(setting)
        except Exception as exc:
            return _send(error(400, "Cannot change the fix cost", str(exc)))
        return _send(success_message("Successfully change the fix cost"))

    def get_color_expired(self):
        try:
            colors = self.service.get_color_expired(request.args.get("user_id", ""))
        except Exception as exc:
            return _send(error(400, "Cannot get the color of expiration icon", str(exc)))
        return _send(success(colors))

    def change_color_expired(self):
        try:
            body = _body()
            setting = ChangeExpirationDateSetting(
                user_id=str(body.get("user_id", "")),
                black_expiration_date=int(body.get("black_expiration_date", 0)),
                red_expiration_date=int(body.get("red_expiration_date", 0)),
                yellow_expiration_date=int(body.get("yellow_expiration_date", 0)),
            )
        except (ValueError, TypeError) as exc:
            return _send(error(400, "Failed to parse request body", str(exc)))
        if not setting.user_id:
            return _send(error(400, "UserID is required", ""))
        try:
            self.service.change_color_expired(setting)
        except Exception as exc:
            return _send(error(400, "Cannot change the color of expiration icon", str(exc)))
        return _send(success_message("Successfully change the color of expiration icon"))