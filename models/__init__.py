"""
models/ - Domain Models
=======================
Plain value objects returned and accepted by the repositories.
"""
