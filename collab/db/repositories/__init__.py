"""
Per-domain repository modules for database access.

Each module exposes plain functions that take a SQLAlchemy `Session` as their
first argument and own the commit for the rows they write.
"""
