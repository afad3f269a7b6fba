"""HTTP handlers for recipes."""

from __future__ import annotations

from typing import Any, Callable

from flask import jsonify, request

from bakingup.web.response import Response, error, success

_PARSE_FAILURE = "Cannot parse request body"


def _send(rsp: Response):
    return jsonify(rsp.to_dict())


def _json_object() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("request body is not a JSON object")
    return data


class RecipeHandler:
    """Recipe endpoints; each method serves the current Flask request.

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

    def _submit(self, action: Callable[[dict[str, Any]], Any], failure: str):
        try:
            body = _json_object()
        except ValueError as exc:
            return _send(error(400, _PARSE_FAILURE, str(exc)))
        try:
            action(body)
        except Exception as exc:
            return _send(error(400, failure, str(exc)))
        return _send(success(None))

    def get_all_recipes(self):
        return self._fetch("user_id", self.service.get_all_recipes, "Cannot get all recipes")

    def get_recipe_detail(self):
        return self._fetch("recipe_id", self.service.get_recipe_detail, "Cannot get recipe detail")

    def delete_recipe(self):
        try:
            self.service.delete_recipe(request.args.get("recipe_id", ""))
        except Exception as exc:
            return _send(error(400, "Cannot delete a recipe", str(exc)))
        return _send(success(None))

    def add_recipe(self):
        return self._submit(self.service.add_recipe, "Cannot add a recipe")

    def update_hidden_cost(self):
        return self._submit(self.service.update_hidden_cost, "Cannot update hidden cost")

    def update_labor_cost(self):
        return self._submit(self.service.update_labor_cost, "Cannot update labor cost")

    def update_profit_margin(self):
        return self._submit(self.service.update_profit_margin, "Cannot update profit margin")

    def edit_recipe(self):
        return self._submit(self.service.edit_recipe, "Cannot edit a recipe")

    def get_edit_recipe_detail(self):
        return self._fetch(
            "recipe_id", self.service.get_edit_recipe_detail, "Cannot get edit recipe detail"
        )