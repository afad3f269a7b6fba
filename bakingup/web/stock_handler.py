"""HTTP handlers for bakery stock."""

from __future__ import annotations

from typing import Any, Callable

from flask import jsonify, request

from bakingup.web.response import Response, error, success


def _send(rsp: Response):
    return jsonify(rsp.to_dict())


def _json_object() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("request body is not a JSON object")
    return data


class StockHandler:
    """Stock endpoints; each method serves the current Flask request.

    Request bodies are handed to the service as decoded JSON objects.
    """

    def __init__(self, service: Any) -> None:
        self.service = service

    def _fetch(self, param: str, action: Callable[[str], Any], failure: str):
        try:
            result = action(request.args.get(param, ""))
        except Exception as exc:
            return _send(error(400, failure, str(exc)))
        return _send(success(result))

    def _remove(self, param: str, action: Callable[[str], Any], failure: str):
        try:
            action(request.args.get(param, ""))
        except Exception as exc:
            return _send(error(400, failure, str(exc)))
        return _send(success(None))

    def _submit(self, action: Callable[[dict[str, Any]], Any], failure: str):
        try:
            body = _json_object()
        except ValueError as exc:
            return _send(error(400, failure, str(exc)))
        try:
            action(body)
        except Exception as exc:
            return _send(error(400, failure, str(exc)))
        return _send(success(None))

    def get_all_stocks(self):
        return self._fetch("user_id", self.service.get_all_stocks, "Cannot get all stocks.")

    def get_all_stocks_for_order(self):
        return self._fetch(
            "user_id",
            self.service.get_all_stocks_for_order,
            "Cannot get all stocks for order page.",
        )

    def get_stock_detail(self):
        return self._fetch("recipe_id", self.service.get_stock_detail, "Cannot get stock detail.")

    def delete_stock(self):
        return self._remove("recipe_id", self.service.delete_stock, "Cannot delete a stock.")

    def delete_stock_batch(self):
        return self._remove(
            "stock_detail_id", self.service.delete_stock_batch, "Cannot delete a stock batch."
        )

    def get_stock_batch(self):
        return self._fetch(
            "stock_detail_id", self.service.get_stock_batch, "Cannot get stock batch."
        )

    def add_stock(self):
        return self._submit(self.service.add_stock, "Cannot add a stock.")

    def get_stock_recipe_detail(self):
        return self._fetch(
            "recipe_id", self.service.get_stock_recipe_detail, "Cannot get stock recipe detail."
        )

    def add_stock_detail(self):
        return self._submit(self.service.add_stock_detail, "Cannot add a stock detail.")

    def edit_stock(self):
        return self._submit(self.service.edit_stock, "Cannot edit a stock.")

    def get_edit_stock_detail(self):
        return self._fetch(
            "recipe_id", self.service.get_edit_stock_detail, "Cannot get edit stock detail."
        )