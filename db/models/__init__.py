"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.contact import Contact
from db.models.expense import Expense
from db.models.order import Order, OrderItem
from db.models.quote import Quote
from db.models.recipe import Recipe
from db.models.supply import Supply

__all__ = [
    "Order",
    "OrderItem",
    "Quote",
    "Expense",
    "Supply",
    "Contact",
    "Recipe",
]
