"""Orders, their products, stock cutting and the production queue."""

from __future__ import annotations

import re
import sqlite3
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

_RFC3339 = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})$", re.IGNORECASE
)
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)


class OrderStatus(str, Enum):
    """The states an order moves between."""

    IN_PROCESS = "IN_PROCESS"
    DONE = "DONE"
    CANCEL = "CANCEL"


@dataclass
class OrderProductRequest:
    recipe_id: str
    product_quantity: int = 0


@dataclass
class AddInStoreOrderRequest:
    """A sale made in the store; it is done as soon as it is stored."""

    user_id: str
    order_platform: str = ""
    order_date: str = ""
    order_type: str = ""
    is_pre_order: bool = False
    note_text: str = ""
    note_create_at: str = ""
    order_taken_by: str = ""
    order_products: list[OrderProductRequest] = field(default_factory=list)


@dataclass
class AddPreOrderOrderRequest:
    """An order to be picked up later."""

    user_id: str
    order_platform: str = ""
    order_date: str = ""
    order_type: str = ""
    is_pre_order: bool = True
    order_status: str = OrderStatus.IN_PROCESS.value
    note_text: str = ""
    note_create_at: str = ""
    order_taken_by: str = ""
    pick_up_date: str = ""
    pick_up_method: str = ""
    customer_name: str = ""
    phone_number: str = ""
    order_products: list[OrderProductRequest] = field(default_factory=list)


@dataclass
class EditOrderStatusRequest:
    order_id: str
    order_status: str


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    if value[-1] in "zZ":
        value = value[:-1] + "+00:00"
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _parse_or_zero(text: str) -> datetime:
    """Parse an RFC 3339 time; text that does not parse gives the zero time."""
    if not _RFC3339.match(text or ""):
        return _ZERO_TIME
    try:
        parsed = _parse_time(text)
    except ValueError:
        return _ZERO_TIME
    return parsed if parsed is not None else _ZERO_TIME


def _order_dict(row: sqlite3.Row) -> dict[str, Any]:
    order = dict(row)
    order["is_pre_order"] = bool(order["is_pre_order"])
    return order


class OrderRepository:
    """Reads and writes orders and keeps stock in step with their status."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    # Reading

    def _recipe(self, recipe_id: str, with_images: bool) -> dict[str, Any] | None:
        row = self.conn.execute(
            "SELECT * FROM recipes WHERE recipe_id = ?", (recipe_id,)
        ).fetchone()
        if row is None:
            return None
        recipe = dict(row)
        stock = self.conn.execute(
            "SELECT * FROM stocks WHERE recipe_id = ?", (recipe_id,)
        ).fetchone()
        recipe["stocks"] = dict(stock) if stock is not None else None
        if with_images:
            recipe["recipe_images"] = [
                dict(image)
                for image in self.conn.execute(
                    "SELECT * FROM recipe_images WHERE recipe_id = ? ORDER BY image_index",
                    (recipe_id,),
                )
            ]
        return recipe

    def _products(self, order_id: str, with_images: bool) -> list[dict[str, Any]]:
        products = []
        for row in self.conn.execute(
            "SELECT * FROM order_products WHERE order_id = ? ORDER BY order_product_id",
            (order_id,),
        ).fetchall():
            product = dict(row)
            product["recipe"] = self._recipe(row["recipe_id"], with_images)
            products.append(product)
        return products

    def get_all_orders(self, user_id: str) -> list[dict[str, Any]]:
        """The user's orders with their cutting stock and products."""
        orders = []
        for row in self.conn.execute(
            "SELECT * FROM orders WHERE user_id = ?", (user_id,)
        ).fetchall():
            order = _order_dict(row)
            order["cutting_stock"] = [
                dict(cut)
                for cut in self.conn.execute(
                    "SELECT * FROM cutting_stock WHERE order_id = ?", (row["order_id"],)
                )
            ]
            order["order_products"] = self._products(row["order_id"], with_images=False)
            orders.append(order)
        return orders

    def get_order_detail(self, order_id: str) -> dict[str, Any]:
        """One order with its products and their recipes; LookupError if absent."""
        row = self.conn.execute(
            "SELECT * FROM orders WHERE order_id = ?", (order_id,)
        ).fetchone()
        if row is None:
            raise LookupError(f"order {order_id!r} not found")
        order = _order_dict(row)
        order["order_products"] = self._products(order_id, with_images=True)
        return order

    def delete_order(self, order_id: str) -> None:
        with self.conn:
            cursor = self.conn.execute("DELETE FROM orders WHERE order_id = ?", (order_id,))
        if cursor.rowcount == 0:
            raise LookupError(f"order {order_id!r} not found")

    def get_next_order_index(self, user_id: str) -> int:
        """One more than the user's highest order index, or 1 for the first order."""
        row = self.conn.execute(
            "SELECT MAX(order_index) AS top FROM orders WHERE user_id = ?", (user_id,)
        ).fetchone()
        return 1 if row["top"] is None else row["top"] + 1

    # Stock bookkeeping

    def _cut_stock(self, order_id: str, recipe_id: str, quantity: int) -> None:
        """Take ``quantity`` from unexpired batches, earliest sell-by date first."""
        if quantity <= 0:
            return
        now = _now()
        batches = []
        for row in self.conn.execute(
            "SELECT stock_detail_id, quantity, sell_by_date FROM stock_detail WHERE recipe_id = ?",
            (recipe_id,),
        ).fetchall():
            sell_by = _parse_time(row["sell_by_date"])
            if sell_by is not None and sell_by >= now:
                batches.append((sell_by, row))
        batches.sort(key=lambda batch: batch[0])

        for _, batch in batches:
            available = batch["quantity"]
            if available <= 0:
                continue
            taken = min(available, quantity)
            self.conn.execute(
                "UPDATE stock_detail SET quantity = ? WHERE stock_detail_id = ?",
                (available - taken, batch["stock_detail_id"]),
            )
            self.conn.execute(
                "INSERT INTO cutting_stock (stock_detail_id, order_id, quantity, cutting_time)"
                " VALUES (?, ?, ?, ?)",
                (batch["stock_detail_id"], order_id, taken, _now().isoformat()),
            )
            if available >= quantity:
                break
            quantity -= available

    def _undo_cutting(self, order_id: str) -> None:
        """Give back every quantity cut for the order and forget the cuts."""
        for cut in self.conn.execute(
            "SELECT stock_detail_id, quantity FROM cutting_stock WHERE order_id = ?", (order_id,)
        ).fetchall():
            stock = self.conn.execute(
                "SELECT quantity FROM stock_detail WHERE stock_detail_id = ?",
                (cut["stock_detail_id"],),
            ).fetchone()
            if stock is None:
                raise LookupError(f"stock detail {cut['stock_detail_id']!r} not found")
            self.conn.execute(
                "UPDATE stock_detail SET quantity = ? WHERE stock_detail_id = ?",
                (stock["quantity"] + cut["quantity"], cut["stock_detail_id"]),
            )
        self.conn.execute("DELETE FROM cutting_stock WHERE order_id = ?", (order_id,))

    def _queue(self, user_id: str, order_id: str, recipe_id: str, quantity: int) -> None:
        self.conn.execute(
            "INSERT INTO production_queue (user_id, recipe_id, order_id, production_quantity)"
            " VALUES (?, ?, ?, ?)",
            (user_id, recipe_id, order_id, quantity),
        )

    def _clear_queue(self, order_id: str) -> None:
        self.conn.execute("DELETE FROM production_queue WHERE order_id = ?", (order_id,))

    def _add_product(self, order_id: str, product: OrderProductRequest) -> None:
        self.conn.execute(
            "INSERT INTO order_products (order_id, recipe_id, product_quantity) VALUES (?, ?, ?)",
            (order_id, product.recipe_id, product.product_quantity),
        )

    # Writing

    def _insert_order(self, user_id: str, **columns: Any) -> str:
        order_id = str(uuid.uuid4())
        columns = {
            "order_id": order_id,
            "user_id": user_id,
            "order_index": self.get_next_order_index(user_id),
            **columns,
        }
        names = ", ".join(columns)
        marks = ", ".join("?" for _ in columns)
        self.conn.execute(f"INSERT INTO orders ({names}) VALUES ({marks})", tuple(columns.values()))
        return order_id

    def add_in_store_order(self, order: AddInStoreOrderRequest) -> str:
        """Store a finished in-store order, cut its stock and return its id."""
        note_created = _now()
        if order.note_text:
            note_created = _parse_or_zero(order.note_create_at)
        with self.conn:
            order_id = self._insert_order(
                order.user_id,
                order_platform=order.order_platform,
                order_date=_parse_or_zero(order.order_date).isoformat(),
                order_type=order.order_type,
                is_pre_order=int(order.is_pre_order),
                order_status=OrderStatus.DONE.value,
                order_note_text=order.note_text,
                order_note_create_at=note_created.isoformat(),
                order_taken_by=order.order_taken_by,
            )
            for product in order.order_products:
                self._add_product(order_id, product)
                self._cut_stock(order_id, product.recipe_id, product.product_quantity)
        return order_id

    def add_pre_order_order(self, order: AddPreOrderOrderRequest) -> str:
        """Store a pre-order; cut stock when done, queue production when in process."""
        status = OrderStatus(order.order_status)
        note_created = _now()
        if order.note_text:
            note_created = _parse_or_zero(order.note_create_at)
        with self.conn:
            order_id = self._insert_order(
                order.user_id,
                order_platform=order.order_platform,
                order_date=_parse_or_zero(order.order_date).isoformat(),
                order_type=order.order_type,
                is_pre_order=int(order.is_pre_order),
                order_status=status.value,
                order_note_text=order.note_text,
                order_note_create_at=note_created.isoformat(),
                order_taken_by=order.order_taken_by,
                pick_up_date_time=_parse_or_zero(order.pick_up_date).isoformat(),
                pick_up_method=order.pick_up_method,
                customer_name=order.customer_name or "-",
                customer_phone_num=order.phone_number or "-",
            )
            for product in order.order_products:
                self._add_product(order_id, product)
                if status is OrderStatus.DONE:
                    self._cut_stock(order_id, product.recipe_id, product.product_quantity)
                elif status is OrderStatus.IN_PROCESS:
                    self._queue(order.user_id, order_id, product.recipe_id, product.product_quantity)
        return order_id

    def edit_order_status(self, request: EditOrderStatusRequest) -> None:
        """Move an order to a new status, adjusting stock and the production queue."""
        target = OrderStatus(request.order_status)
        with self.conn:
            row = self.conn.execute(
                "SELECT * FROM orders WHERE order_id = ?", (request.order_id,)
            ).fetchone()
            if row is None:
                raise LookupError(f"order {request.order_id!r} not found")
            order_id, user_id = row["order_id"], row["user_id"]
            current = row["order_status"]
            products = self.conn.execute(
                "SELECT recipe_id, product_quantity FROM order_products WHERE order_id = ?",
                (order_id,),
            ).fetchall()

            def cut_products() -> None:
                for product in products:
                    self._cut_stock(order_id, product["recipe_id"], product["product_quantity"])

            def queue_products() -> None:
                for product in products:
                    self._queue(user_id, order_id, product["recipe_id"], product["product_quantity"])

            if row["is_pre_order"]:
                if current == OrderStatus.IN_PROCESS:
                    if target is OrderStatus.DONE:
                        for entry in self.conn.execute(
                            "SELECT recipe_id, production_quantity FROM production_queue"
                            " WHERE order_id = ?",
                            (order_id,),
                        ).fetchall():
                            self._cut_stock(
                                order_id, entry["recipe_id"], entry["production_quantity"]
                            )
                        self._clear_queue(order_id)
                    elif target is OrderStatus.CANCEL:
                        self._clear_queue(order_id)
                elif current == OrderStatus.DONE:
                    if target is OrderStatus.CANCEL:
                        self._undo_cutting(order_id)
                    elif target is OrderStatus.IN_PROCESS:
                        self._undo_cutting(order_id)
                        queue_products()
                elif current == OrderStatus.CANCEL:
                    if target is OrderStatus.DONE:
                        cut_products()
                    elif target is OrderStatus.IN_PROCESS:
                        queue_products()
            elif current == OrderStatus.DONE and target is OrderStatus.CANCEL:
                self._undo_cutting(order_id)
            elif current == OrderStatus.CANCEL and target is OrderStatus.DONE:
                cut_products()

            self.conn.execute(
                "UPDATE orders SET order_status = ? WHERE order_id = ?", (target.value, order_id)
            )