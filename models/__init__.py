"""
models/ - Domain Layer
======================
Plain dataclasses for users and roles, menu items, orders and franchises.
No database access lives here.
"""
