"""
repositories/ - Data Access Layer
==================================
One repository per aggregate (users, sessions, menu, orders, franchises).
Each method borrows one connection, runs its SQL and returns domain model
objects; password digests and raw tokens never leave this layer.
"""
