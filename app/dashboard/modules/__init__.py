"""
Screen modules live under this package.

Each module owns its blueprint and list configuration (search, sort and filter
fields), while reusing the shared primitives (record store, projection,
presentation, backend client).
"""
