"""
Repository layer for data access.

Repositories encapsulate SQLAlchemy queries for accounts, sessions, favorites
and tags. `SqlStore` groups them behind the `Store` interface that the
services use; `MemoryStore` implements the same interface without a database.
"""
