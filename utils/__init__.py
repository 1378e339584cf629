"""
utils/ - Shared Helpers
=======================
Logging setup and date conversions used across the other layers.
"""
