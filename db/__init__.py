"""
db/ - Database Layer
====================
PostgreSQL connection pool and the one-time bootstrap of the log schema/table.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
