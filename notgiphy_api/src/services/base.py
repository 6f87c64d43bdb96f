from __future__ import annotations

from src.repositories.store import Store


class BaseService:
    """
    Base class for services. Holds the store used for the current request.

    Services should keep business logic and orchestration, delegating data access
    to the store.
    """

    def __init__(self, store: Store) -> None:
        self.store = store
