"""
Shops screen: list with search, shop type and package filters, name sort,
list/card layouts and session-local delete.
"""
