"""
Registry error taxonomy.

Only Not-Found is modelled here. Constraint violations and infrastructure
failures surface as the SQLAlchemy exceptions raised by the backing store
(``IntegrityError``, ``OperationalError``, ...) and propagate unmodified
after the surrounding transaction has rolled back.
"""

from __future__ import annotations

from typing import Any


class RegistryError(Exception):
    """Base class for errors raised by the registry core."""


class NotFoundError(RegistryError):
    """The requested row does not exist."""

    def __init__(self, entity: str, key: Any):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")
