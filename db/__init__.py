"""
db/ - Database Layer
====================
Opens and closes the PostgreSQL connection used by the repositories.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
