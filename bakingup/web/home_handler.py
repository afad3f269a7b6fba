"""HTTP handlers for the home dashboard."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from flask import jsonify, request

from bakingup.web.response import Response, error, success

_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$", re.IGNORECASE
)
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_WASTED_FILTERS = frozenset({"Wasted Ingredients", "Wasted Bakery Stock"})
_SELLING_QUICKLY = "Selling Quickly"


def _parse_rfc3339(text: str) -> datetime:
    if not _RFC3339.match(text):
        raise ValueError(f"cannot parse {text!r} as RFC 3339")
    if text[-1] in "zZ":
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def _parse_or_zero(text: str) -> datetime:
    try:
        return _parse_rfc3339(text)
    except ValueError:
        return _ZERO_TIME


def _month_start(moment: datetime) -> datetime:
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _string_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError("expected a list of strings")
    return [str(item) for item in value]


def _optional_time(value: Any) -> datetime:
    if value is None:
        return _ZERO_TIME
    if not isinstance(value, str):
        raise TypeError("expected an RFC 3339 time string")
    return _parse_rfc3339(value)


@dataclass
class _FilterSellingRequest:
    user_id: str = ""
    filter_type: str = ""
    sales_channel: list[str] = field(default_factory=list)
    order_types: list[str] = field(default_factory=list)
    start_date_time: datetime = _ZERO_TIME
    end_date_time: datetime = _ZERO_TIME
    unit_type: str = ""
    sort_type: str = ""

    @classmethod
    def from_json(cls, data: Any) -> _FilterSellingRequest:
        if not isinstance(data, dict):
            raise ValueError("request body is not a JSON object")
        return cls(
            user_id=str(data.get("user_id", "")),
            filter_type=str(data.get("filter_type", "")),
            sales_channel=_string_list(data.get("sales_channel")),
            order_types=_string_list(data.get("order_types")),
            start_date_time=_optional_time(data.get("start_date_time")),
            end_date_time=_optional_time(data.get("end_date_time")),
            unit_type=str(data.get("unit_type", "")),
            sort_type=str(data.get("sort_type", "")),
        )


def _send(rsp: Response):
    return jsonify(rsp.to_dict())


class HomeHandler:
    """Dashboard endpoints; each method serves the current Flask request."""

    def __init__(self, service: Any) -> None:
        self.service = service

    def get_unread_notification(self):
        try:
            amount = self.service.get_unread_notification(request.args.get("user_id", ""))
        except Exception as exc:
            return _send(error(400, "Cannot get unread notification amount.", str(exc)))
        return _send(success(amount))

    def get_top_products(self):
        try:
            req = _FilterSellingRequest.from_json(request.get_json(silent=True))
        except (ValueError, TypeError) as exc:
            return _send(error(400, "Failed to parse request body", str(exc)))
        if not req.user_id:
            return _send(error(400, "UserID is required", ""))

        start = _month_start(req.start_date_time)
        end = _month_start(req.end_date_time)
        try:
            if req.filter_type == _SELLING_QUICKLY:
                result = self.service.get_product_selling_quickly(
                    req.user_id, req.sales_channel, req.order_types
                )
            elif req.filter_type in _WASTED_FILTERS:
                result = self.service.get_wasted_product(
                    req.user_id, req.filter_type, req.unit_type, req.sort_type
                )
            else:
                result = self.service.get_top_products(
                    req.user_id, req.filter_type, req.sales_channel, req.order_types, start, end
                )
        except Exception as exc:
            return _send(error(400, "Cannot get the filter response.", str(exc)))
        return _send(success(result))

    def get_dashboard_chart_data(self):
        user_id = request.args.get("user_id", "")
        start = _parse_or_zero(request.args.get("start_date_time", ""))
        end = _parse_or_zero(request.args.get("end_date_time", ""))
        try:
            result = self.service.get_dashboard_chart_data(user_id, start, end)
        except Exception as exc:
            return _send(error(400, "Cannot get data for all charts.", str(exc)))
        return _send(success(result))