"""Shared base class for all declarative models.

Provides a permissive constructor and a plain-dict view of the mapped
columns, which is what the report layer consumes regardless of whether a
row came from the local database or from the hosted backend.
"""
from typing import Any, Dict

from app.extensions import db


class BaseModel(db.Model):
    __abstract__ = True
    # permit legacy or purely-typing annotations without ``Mapped``
    __allow_unmapped__ = True

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)

    def as_dict(self) -> Dict[str, Any]:
        """Column name -> current value for every mapped column."""
        return {col.name: getattr(self, col.key) for col in self.__table__.columns}
