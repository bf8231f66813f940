"""
Database models package
"""
# Base model used to give all declarative models a permissive constructor
from app.models.base import BaseModel

from app.models.user import User
from app.models.sales import SaleRecord

__all__ = [
    'BaseModel',
    'User',
    'SaleRecord',
]
