"""SQLite connection and table definitions for the bakery data."""

from __future__ import annotations

import sqlite3

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    user_id TEXT PRIMARY KEY,
    first_name TEXT NOT NULL DEFAULT '',
    last_name TEXT NOT NULL DEFAULT '',
    telephone TEXT NOT NULL DEFAULT '',
    store_name TEXT NOT NULL DEFAULT '',
    black_expiration_date TEXT,
    red_expiration_date TEXT,
    yellow_expiration_date TEXT,
    language TEXT NOT NULL DEFAULT 'EN'
);
CREATE TABLE IF NOT EXISTS devices (
    device_token TEXT PRIMARY KEY,
    user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE
);
CREATE TABLE IF NOT EXISTS notifications (
    noti_id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
    eng_title TEXT NOT NULL DEFAULT '',
    thai_title TEXT NOT NULL DEFAULT '',
    eng_message TEXT NOT NULL DEFAULT '',
    thai_message TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL,
    is_read INTEGER NOT NULL DEFAULT 0,
    noti_type TEXT NOT NULL DEFAULT '',
    item_id TEXT NOT NULL DEFAULT '',
    item_name TEXT NOT NULL DEFAULT '',
    noti_item_type TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS fix_cost (
    fix_cost_id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
    rent REAL NOT NULL DEFAULT 0,
    salaries REAL NOT NULL DEFAULT 0,
    insurance REAL NOT NULL DEFAULT 0,
    subscriptions REAL NOT NULL DEFAULT 0,
    advertising REAL NOT NULL DEFAULT 0,
    electricity REAL NOT NULL DEFAULT 0,
    water REAL NOT NULL DEFAULT 0,
    gas REAL NOT NULL DEFAULT 0,
    other REAL NOT NULL DEFAULT 0,
    note TEXT NOT NULL DEFAULT '',
    created_at TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS recipes (
    recipe_id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
    recipe_eng_name TEXT NOT NULL DEFAULT '',
    recipe_thai_name TEXT NOT NULL DEFAULT '',
    total_time TEXT,
    servings INTEGER NOT NULL DEFAULT 0,
    eng_instruction TEXT NOT NULL DEFAULT '',
    thai_instruction TEXT NOT NULL DEFAULT '',
    hidden_cost REAL NOT NULL DEFAULT 0,
    labor_cost REAL NOT NULL DEFAULT 0,
    profit_margin REAL NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS recipe_images (
    recipe_image_id INTEGER PRIMARY KEY AUTOINCREMENT,
    recipe_id TEXT NOT NULL REFERENCES recipes(recipe_id) ON DELETE CASCADE,
    image_index INTEGER NOT NULL DEFAULT 0,
    recipe_url TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS recipe_instruction_images (
    instruction_image_id INTEGER PRIMARY KEY AUTOINCREMENT,
    recipe_id TEXT NOT NULL REFERENCES recipes(recipe_id) ON DELETE CASCADE,
    instruction_image_index INTEGER NOT NULL DEFAULT 0,
    instruction_url TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS ingredients (
    ingredient_id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
    ingredient_eng_name TEXT NOT NULL DEFAULT '',
    ingredient_thai_name TEXT NOT NULL DEFAULT '',
    unit TEXT NOT NULL DEFAULT '',
    ingredient_less_than REAL NOT NULL DEFAULT 0,
    day_before_expire TEXT
);
CREATE TABLE IF NOT EXISTS ingredient_images (
    ingredient_image_id INTEGER PRIMARY KEY AUTOINCREMENT,
    ingredient_id TEXT NOT NULL REFERENCES ingredients(ingredient_id) ON DELETE CASCADE,
    ingredient_image_index INTEGER NOT NULL DEFAULT 0,
    ingredient_url TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS ingredient_detail (
    ingredient_stock_id TEXT PRIMARY KEY,
    ingredient_id TEXT NOT NULL REFERENCES ingredients(ingredient_id) ON DELETE CASCADE,
    price REAL NOT NULL DEFAULT 0,
    ingredient_quantity REAL NOT NULL DEFAULT 0,
    expiration_date TEXT,
    ingredient_supplier TEXT NOT NULL DEFAULT '',
    ingredient_brand TEXT NOT NULL DEFAULT '',
    ingredient_stock_url TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS ingredient_notes (
    ingredient_note_id TEXT PRIMARY KEY,
    ingredient_stock_id TEXT NOT NULL
        REFERENCES ingredient_detail(ingredient_stock_id) ON DELETE CASCADE,
    note_created_at TEXT,
    ingredient_note TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS recipe_ingredients (
    recipe_ingredient_id INTEGER PRIMARY KEY AUTOINCREMENT,
    recipe_id TEXT NOT NULL REFERENCES recipes(recipe_id) ON DELETE CASCADE,
    ingredient_id TEXT NOT NULL REFERENCES ingredients(ingredient_id) ON DELETE CASCADE,
    recipe_ingredient_quantity REAL NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS stocks (
    recipe_id TEXT PRIMARY KEY REFERENCES recipes(recipe_id) ON DELETE CASCADE,
    lst INTEGER NOT NULL DEFAULT 0,
    selling_price REAL NOT NULL DEFAULT 0,
    cost REAL NOT NULL DEFAULT 0,
    stock_less_than INTEGER NOT NULL DEFAULT 0,
    day_before_expired TEXT
);
CREATE TABLE IF NOT EXISTS stock_detail (
    stock_detail_id TEXT PRIMARY KEY,
    recipe_id TEXT NOT NULL REFERENCES stocks(recipe_id) ON DELETE CASCADE,
    created_at TEXT,
    sell_by_date TEXT,
    quantity INTEGER NOT NULL DEFAULT 0,
    note TEXT NOT NULL DEFAULT ''
);
CREATE TABLE IF NOT EXISTS orders (
    order_id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
    order_platform TEXT NOT NULL DEFAULT '',
    order_date TEXT,
    order_type TEXT NOT NULL DEFAULT '',
    is_pre_order INTEGER NOT NULL DEFAULT 0,
    order_status TEXT NOT NULL DEFAULT '',
    order_index INTEGER NOT NULL DEFAULT 0,
    order_note_text TEXT NOT NULL DEFAULT '',
    order_note_create_at TEXT,
    order_taken_by TEXT NOT NULL DEFAULT '',
    pick_up_date_time TEXT,
    pick_up_method TEXT,
    customer_name TEXT,
    customer_phone_num TEXT
);
CREATE TABLE IF NOT EXISTS order_products (
    order_product_id INTEGER PRIMARY KEY AUTOINCREMENT,
    order_id TEXT NOT NULL REFERENCES orders(order_id) ON DELETE CASCADE,
    recipe_id TEXT NOT NULL REFERENCES recipes(recipe_id) ON DELETE CASCADE,
    product_quantity INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE IF NOT EXISTS cutting_stock (
    cutting_stock_id INTEGER PRIMARY KEY AUTOINCREMENT,
    stock_detail_id TEXT NOT NULL REFERENCES stock_detail(stock_detail_id) ON DELETE CASCADE,
    order_id TEXT NOT NULL REFERENCES orders(order_id) ON DELETE CASCADE,
    quantity INTEGER NOT NULL DEFAULT 0,
    cutting_time TEXT
);
CREATE TABLE IF NOT EXISTS production_queue (
    production_queue_id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id TEXT NOT NULL REFERENCES users(user_id) ON DELETE CASCADE,
    recipe_id TEXT NOT NULL REFERENCES recipes(recipe_id) ON DELETE CASCADE,
    order_id TEXT NOT NULL REFERENCES orders(order_id) ON DELETE CASCADE,
    production_quantity INTEGER NOT NULL DEFAULT 0
);
"""


def connect(path: str = ":memory:") -> sqlite3.Connection:
    """Open a database with row access by name and foreign keys enforced."""
    conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def create_schema(conn: sqlite3.Connection) -> None:
    """Create every table that does not exist yet."""
    with conn:
        conn.executescript(_SCHEMA)