"""
Central constants for the dashboard.
"""
from __future__ import annotations

VIEW_MODES = ("list", "card")
DEFAULT_VIEW_MODE = "list"

SORT_ORDERS = ("asc", "desc")
DEFAULT_SORT_ORDER = "asc"

DEFAULT_PAGE_SIZE = 5

DATA_SOURCES = ("fixture", "remote")

# Labels shown in the shop type dropdown; values without a label are shown as-is.
SHOP_TYPE_LABELS = {
    "General": "General Shop",
}

# Backend paths
CUSTOMER_CREATE_PATH = "/customer"
CUSTOMER_LIST_PATH = "/customers"
SHOP_LIST_PATH = "/shops"

# Messages shown by the add customer form
MSG_CUSTOMER_ADDED = "Customer added successfully!"
MSG_CUSTOMER_REJECTED = "Error: Could not add customer."
MSG_BACKEND_UNAVAILABLE = "Error: Unable to connect to the server."
MSG_ALREADY_SUBMITTED = "This form was already submitted."
