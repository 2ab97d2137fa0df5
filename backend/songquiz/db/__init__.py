"""Database Package — the declarative base shared by every ORM model.

Sessions come from infrastructure/database.py; this package only owns metadata.
"""
