"""
ORM models for accounts, login sessions, favorites and tags.

Importing this package ensures model classes are registered with the Base
metadata for Alembic and runtime usage.
"""

from .accounts import (  # noqa: F401
    Account,
    LoginSession,
)
from .favorites import (  # noqa: F401
    Favorite,
    Tag,
)
