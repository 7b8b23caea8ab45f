"""
db/ - Database Layer
====================
Handles PostgreSQL connections, schema initialization, and parameterized statement execution.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
