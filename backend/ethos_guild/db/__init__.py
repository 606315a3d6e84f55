"""Persistence Base — declarative Base and metadata conventions.

Sessions come from infrastructure/database.py; this package only defines
what the tables share.
"""
