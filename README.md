# bakingup

Building blocks for a small-bakery backend: a SQLite data layer for users,
devices, notifications, settings and orders, and Flask request handlers
that answer with one JSON envelope.

## Installing

```
pip install .
pip install ".[test]"   # with the test tools
```

## Configuration

`bakingup.config.load_config(env_file=".env")` loads the dotenv file into
the environment and returns a `Container` whose `http` member is an
`HTTPConfig` with:

- `port` – from `HTTP_PORT`
- `allowed_origins` – from `HTTP_ALLOWED_ORIGINS`
- `receipt_scanner_url` – from `RECEIPT_SCANNER_URL`

It raises `FileNotFoundError` when the file does not exist.

## Storage

`bakingup.storage.schema.connect(path=":memory:")` opens a SQLite database
with rows readable by column name and foreign keys enforced;
`create_schema(conn)` creates every table that is missing.

Repositories built on that connection, each returning plain dicts:

- `bakingup.storage.users.UserRepository` – create, read and edit users
  (`ManageUserRequest`), add and remove device tokens
  (`DeviceTokenRequest`), and list future pre-orders with their production
  queue. New users start in English with default expiration colours.
- `bakingup.storage.notifications.NotificationRepository` – list a user's
  notifications newest first, create one from a `CreateNotificationItem`
  (returns its new id), delete, mark one read or mark all read.
- `bakingup.storage.settings.SettingsRepository` – delete an account, read
  and change the language (`"English"` is stored as `EN`, anything else as
  `TH`), read fixed costs in a date range (one empty entry when there are
  none) and change them, read and change the expiration colour day counts.
- `bakingup.storage.orders.OrderRepository` – list and read orders, delete
  them, compute the next order index, add in-store orders and pre-orders,
  and move orders between `OrderStatus` values (`IN_PROCESS`, `DONE`,
  `CANCEL`). Finished orders take their quantities from unexpired stock
  batches, earliest sell-by date first; orders in process go onto the
  production queue; status changes give stock back or queue production as
  needed.

Lookups of a missing record raise `LookupError`.

## HTTP handlers

`bakingup.web.response` defines the envelope: `Response(status, message,
data, error)` with `to_dict()`, which leaves out empty `data` and `error`,
and the helpers `success(data)`, `error(status, message, err)` and
`success_message(message)`.

```json
{"status": 200, "message": "Success", "data": {}}
```

`bakingup.web.middleware.setup_cors(app, allowed_origins)` adds CORS
headers to every response of a Flask application.

Handler classes take a service object and serve the current Flask request
from each method: `AuthHandler`, `UserHandler`, `HomeHandler`,
`IngredientHandler`, `RecipeHandler`, `StockHandler`, `SettingsHandler`
and `NotificationHandler`. Failures answer with `status` 400 and a
message naming what could not be done.

`NotificationRepository` has exactly the methods `NotificationHandler`
calls, so it can serve as that handler's service:

```python
from flask import Flask

from bakingup.storage.notifications import NotificationRepository
from bakingup.storage.schema import connect, create_schema
from bakingup.web.middleware import setup_cors
from bakingup.web.notification_handler import NotificationHandler

conn = connect("bakingup.db", )
create_schema(conn)

handler = NotificationHandler(NotificationRepository(conn))

app = Flask(__name__)
setup_cors(app, "*")
app.add_url_rule(
    "/api/noti/getAllNotifications",
    view_func=handler.get_all_notifications,
    methods=["GET"],
)
app.add_url_rule(
    "/api/noti/readNotification",
    view_func=handler.read_notification,
    methods=["PUT"],
)
```

## What this package does not do

- It has no command and does not start a server; routes are registered by
  the caller on their own Flask application, as above.
- It has no HTTP handlers for orders.
- It has no storage for ingredients, recipes, bakery stock or dashboard
  figures, and does not call a receipt-scanning service. The ingredient,
  recipe, stock and home handlers need a service object supplied by the
  caller.
- Handlers such as `SettingsHandler`, `UserHandler` and `AuthHandler`
  call service methods whose names or arguments differ from the
  repositories, so a service layer between them is left to the caller.