"""SQLite schema and repositories for users, notifications, settings and orders."""