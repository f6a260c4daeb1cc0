"""
High-level use cases for the Conceptos API.

Routers call these services instead of touching a storage backend directly.
"""
