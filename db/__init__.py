"""
db/ - Database Layer
====================
Connection pooling, scoped transactions, identifier lookup and schema
initialization. This layer is the lowest in the architecture; only the
default-admin seed in init_db reaches up into the repositories.
"""
