"""
db/ - Database Layer
====================
Owns the PostgreSQL connection, the unit-of-work transaction boundary and
schema initialization. This layer is the lowest in the architecture and has
no dependencies on other layers.
"""
